"""
Start the demo api with uvicorn
"""
import uvicorn

from lgtm_otel_api.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "lgtm_otel_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
