import uvicorn

from jobcost.core.config import settings


def main() -> None:
    uvicorn.run(
        "jobcost.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.ENVIRONMENT == "local",
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
