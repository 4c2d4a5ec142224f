"""
HTTP-сервис товаров и корзины (FastAPI).
Приложение: webapi:app

    uvicorn webapi:app --host 0.0.0.0 --port 8080
"""

import uvicorn

from api.main import create_app
from config import get_settings


SETTINGS = get_settings()

app = create_app(settings=SETTINGS)


if __name__ == "__main__":
    uvicorn.run(app, host=SETTINGS.api_host, port=SETTINGS.api_port, log_config=None)
