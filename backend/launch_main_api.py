#!/usr/bin/env python3
"""Launch the main API server."""
import sys
from pathlib import Path

# Add src to path
BACKEND_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(BACKEND_ROOT / "src"))

if __name__ == "__main__":
    import uvicorn

    from memory_api.core.config import get_settings

    settings = get_settings()

    print("=" * 60)
    print(f"Starting Main API Server on http://{settings.host}:{settings.port}")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "memory_api.main:app",
        app_dir=str(BACKEND_ROOT / "src"),
        host=settings.host,
        port=settings.port,
        reload=True,
    )
