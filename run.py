#!/usr/bin/env python3
"""
Development server runner for Resume Studio Backend.
Use this for local development and testing.
"""
import os
import sys


def main():
    # Add the project directory to the path
    project_dir = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, project_dir)

    # Import uvicorn
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Run: pip install uvicorn[standard]")
        sys.exit(1)

    from app.config import get_settings

    # Environment variables and .env, same source as the app itself
    settings = get_settings()
    storage = "redis" if settings.redis_url else "in-memory"

    print(f"\n🚀 Starting {settings.app_name}")
    print(f"   Host: {settings.host}")
    print(f"   Port: {settings.port}")
    print(f"   Debug: {settings.debug}")
    print(f"   Storage: {storage}")
    print(f"\n📚 API Documentation: http://localhost:{settings.port}/docs")
    print(f"📖 ReDoc: http://localhost:{settings.port}/redoc")
    print(f"❤️  Health Check: http://localhost:{settings.port}/api/health\n")

    # Run the server
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
