import uvicorn

from app.config import Settings
from app.logging_setup import setup_logging
from app.main import create_app


def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
