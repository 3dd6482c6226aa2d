"""Run the posts service: ``python -m spitfire_posts``."""

import logging

import uvicorn

from spitfire_posts.app import create_app
from spitfire_posts.settings import Settings


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
