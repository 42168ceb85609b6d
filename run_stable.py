"""
Serve the Aadhaar Insight Metrics API with uvicorn (no reload).
"""
import uvicorn

from aadhaar_insight.config import settings


def main():
    print(f"🚀 {settings.PROJECT_NAME} v{settings.VERSION}")
    print("📖 Docs: http://localhost:8000/docs")
    print(f"📦 Bundle: {settings.bundle_file}")

    uvicorn.run(
        "aadhaar_insight.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
