from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chartgpt.core.config import settings


def setup_cors(app: FastAPI) -> None:
    origins = settings.cors_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # browsers reject credentialed requests against a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
