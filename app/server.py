import uvicorn

from app.core.config import settings


def main():
    uvicorn.run(
        "app.main:asgi_app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # keep our dictConfig
    )


if __name__ == "__main__":
    main()
