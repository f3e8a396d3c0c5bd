# main.py
# FastAPI 应用入口
#   - 日志输出
#   - CORS、路由、健康检查、静态前端
#   - 端口被占用时顺延启动
#
# uvicorn wordhub.main:app --reload --port 5000

import socket
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger

from wordhub import __version__
from wordhub.config import Settings, get_settings
from wordhub.dependencies import init_dependencies, shutdown_dependencies
from wordhub.routers import v1_router, v2_router


def configure_logging(settings: Settings) -> None:
    """输出到 stderr，并写入按大小轮转的日志文件"""
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    if settings.log_file:
        logger.add(settings.log_file, rotation=settings.log_rotation, level=settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    settings = app.state.settings
    configure_logging(settings)
    logger.info("[STARTUP] Initializing dictionary services...")
    init_dependencies()
    logger.info(f"[OK] {settings.app_name} started")

    yield

    logger.info("[SHUTDOWN] Releasing resources...")
    await shutdown_dependencies()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="在一个 API 中查询剑桥、牛津高阶和韦氏词典",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router)   # /api/v1/...
    app.include_router(v2_router)   # /api/v2/...

    @app.get("/health")
    def health_check():
        """健康检查"""
        return {"status": "ok"}

    # 最后挂载，不遮挡 API 路由
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


def find_available_port(host: str, port: int, attempts: int) -> int:
    """
    从 ``port`` 开始查找第一个可绑定的端口

    Raises:
        RuntimeError: 连续 ``attempts`` 个端口都被占用
    """
    for candidate in range(port, port + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind((host, candidate))
                return candidate
            except OSError:
                logger.warning(f"Port {candidate} is already in use, trying port {candidate + 1}")
    raise RuntimeError(f"No free port in {port}-{port + attempts - 1}")


def serve(settings: Optional[Settings] = None) -> None:
    """用 uvicorn 启动 API"""
    settings = settings or get_settings()
    configure_logging(settings)
    port = find_available_port(settings.api_host, settings.api_port, settings.port_fallback_attempts)
    logger.info(f"Dictionary API server running on http://localhost:{port}")
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=port,
        log_level=settings.log_level.lower(),
    )


app = create_app()
