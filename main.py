"""
Local development server for the Beam Cutting Optimizer.
Run this file to test locally before deploying to Vercel.
"""
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Import the routes from api/index.py
from api.index import solve, api_root, home

HOST = os.getenv("BEAM_HOST", "0.0.0.0")
PORT = int(os.getenv("BEAM_PORT", "8000"))
RELOAD = os.getenv("BEAM_RELOAD", "1").lower() not in ("0", "false", "no")

# Create main app
app = FastAPI()

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add routes
app.get("/")(home)
app.post("/api/solve")(solve)
app.get("/api")(api_root)

if __name__ == "__main__":
    print("\n" + "="*60)
    print("🪚 Beam Cutting Optimizer - Local Development Server")
    print("="*60)
    print(f"\n✅ Server starting at: http://localhost:{PORT}")
    print(f"📋 API docs at: http://localhost:{PORT}/docs")
    print("\n💡 Press Ctrl+C to stop the server\n")

    uvicorn.run(
        "main:app",
        host=HOST,
        port=PORT,
        reload=RELOAD,
        log_level="info"
    )
