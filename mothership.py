# ============================
# 🛸 Imports & Config
# ============================
import argparse
import sys
import uuid

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, Field

from config import ConfigError, load_config
from directory_store import DirectoryStore, StoreOpenError
from log_setup import setup_logging
from registry import (
    MAX_PORT,
    MIN_PORT,
    CorruptRecord,
    DirectoryUnavailable,
    InvalidInput,
    RegistryError,
    RegistryService,
    TopicNotFound,
)

# ============================
# 🏁 Error -> Status Map
# ============================
# "never registered" and "storage trouble" must look different to callers
ERROR_STATUS_MAP: dict[type[RegistryError], int] = {
    InvalidInput: 422,
    TopicNotFound: 400,
    CorruptRecord: 500,
    DirectoryUnavailable: 500,
}


# ============================
# 📦 API Models
# ============================
class RegisterRequest(BaseModel):
    """
    📦 Node registration payload schema.

    The host is deliberately absent: it comes from the connection.

    Attributes:
        topic_name (str): Topic the node claims.
        node_id (str): Unique identifier for the node.
        node_port (int): Port the node listens on.
    """
    topic_name: str = Field(min_length=1)
    node_id: str = Field(min_length=1)
    node_port: int = Field(ge=MIN_PORT, le=MAX_PORT)


def create_app(registry: RegistryService, node_id: str) -> FastAPI:
    """
    🛸 Builds the mothership's HTTP face.

    Handlers are plain ``def`` so FastAPI runs them in its thread pool and
    blocking store I/O stays off the event loop.

    Args:
        registry (RegistryService): The directory to serve.
        node_id (str): This mothership instance's id.

    Returns:
        FastAPI: Ready to hand to uvicorn.
    """
    app = FastAPI(title="mothership")

    @app.exception_handler(RegistryError)
    def registry_error_handler(request: Request, exc: RegistryError):
        status_code = ERROR_STATUS_MAP.get(type(exc), 500)
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    # ============================
    # 🚪 Node Registration Endpoint
    # ============================
    @app.post("/register")
    def register_node(payload: RegisterRequest, request: Request):
        """
        🚪 "I own this topic, come find me here."

        Returns:
            Response: 200 with an empty body.
        """
        caller_host = request.client.host if request.client else None
        registry.register(payload.topic_name, payload.node_port, caller_host, payload.node_id)
        return Response(status_code=200)

    # ============================
    # 🔍 Topic Lookup
    # ============================
    @app.get("/topics/{topic_name:path}")
    def get_topic_node_info(topic_name: str):
        """🔍 Who owns ``topic_name``? Go talk to them directly."""
        resolution = registry.resolve(topic_name)
        return {
            "node_address": resolution.address,
            "node_id": resolution.node_id,
            "node_topic": resolution.topic,
        }

    # ============================
    # 📊 Status
    # ============================
    @app.get("/status")
    def get_status():
        return {"node_id": node_id, "topic_count": registry.topic_count()}

    return app


# ============================
# 🏁 Bootstrap
# ============================
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Mothership topic registry")
    parser.add_argument("config", help="Path to the mothership TOML config")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_dir, config.log_level)

    node_id = str(uuid.uuid4())
    with logger.contextualize(mothership=node_id):
        logger.info("🆔 node id generated | node_id={}", node_id)

        try:
            store = DirectoryStore(config.db_path)
        except StoreOpenError as e:
            logger.critical("💀 unable to open mothership db: {}", e)
            return 1

        with store:
            app = create_app(RegistryService(store), node_id)
            logger.info("📡 web server is listening | address=0.0.0.0:{}", config.port)
            uvicorn.run(app, host="0.0.0.0", port=config.port, log_config=None)

    return 0


if __name__ == "__main__":
    sys.exit(main())
