# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Mirrowel

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from kiro_token_library import KiroTokenError, KiroTokenPipeline
from kiro_token_library.error_handler import is_user_input_error

from .error_responses import error_response, json_response
from .security_config import get_cors_settings

# Configure logging
logging.basicConfig(level=logging.INFO)

# Load environment variables from .env file
load_dotenv()


# --- Lifespan Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage the pipeline's shared HTTP client with the app's lifespan."""
    app.state.pipeline = KiroTokenPipeline()
    logging.info("KiroTokenPipeline initialized.")
    yield
    await app.state.pipeline.close()
    logging.info("KiroTokenPipeline closed.")


# --- FastAPI App Setup ---
app = FastAPI(lifespan=lifespan)

cors_settings = get_cors_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_settings.allow_origins,
    allow_credentials=cors_settings.allow_credentials,
    allow_methods=cors_settings.allow_methods,
    allow_headers=cors_settings.allow_headers,
)


def get_pipeline(request: Request) -> KiroTokenPipeline:
    """Dependency to get the pipeline instance from the app state."""
    return request.app.state.pipeline


@app.get("/")
def read_root():
    return {"Status": "Kiro token tools are running"}


@app.options("/api/process")
async def process_preflight() -> Response:
    return Response(status_code=200)


@app.post("/api/process")
async def process_credentials(
    request: Request,
    pipeline: KiroTokenPipeline = Depends(get_pipeline),
):
    """
    Turns pasted Kiro credentials into a kiro-auth-token.json record,
    the BuilderId client registration file and the account's usage.
    """
    try:
        body = await request.json()
    except ValueError as e:
        logging.error(f"JSON parse error: {e}")
        return error_response(status_code=400, message="Invalid JSON body")

    raw_input = body.get("input") if isinstance(body, dict) else None
    text = "" if raw_input is None else str(raw_input).strip()
    if not text:
        return error_response(status_code=400, message="Empty input")

    try:
        result = await pipeline.process(text)
    except KiroTokenError as e:
        if is_user_input_error(e):
            return error_response(status_code=e.status_code, message=e.message)
        logging.error(f"API Error: {e}")
        return error_response(status_code=e.status_code, message=e.message, exc=e)
    except Exception as e:
        logging.exception(f"API Error: {e}")
        return error_response(status_code=500, message=str(e) or "Server Error", exc=e)

    return json_response(result.to_dict())
