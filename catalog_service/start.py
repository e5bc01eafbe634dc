import uvicorn

from catalog_service.config.config import config
from catalog_service.config.logger_config import log
from catalog_service.main import app


def main():
    log.info("Starting catalog-service on {}:{}", config.APP_HOST, config.APP_PORT)
    uvicorn.run(app, host=config.APP_HOST, port=config.APP_PORT)


if __name__ == "__main__":
    main()
