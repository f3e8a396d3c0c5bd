# config.py
"""
配置管理

- 服务地址与端口、CORS、静态前端
- 日志输出
- 抓取超时与各 schema 版本的请求节流
- 聚合策略
"""

from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger
from pydantic_settings import BaseSettings

# backend/wordhub/config.py -> 仓库根目录
_ROOT = Path(__file__).resolve().parent.parent.parent

for _env_path in (_ROOT / ".env", _ROOT / "config" / ".env"):
    if _env_path.exists():
        load_dotenv(dotenv_path=_env_path)
        logger.debug(f"Loaded environment file: {_env_path}")


class Settings(BaseSettings):
    # ============ FastAPI ============
    app_name: str = "WordHub Dictionary API"
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    debug: bool = False
    port_fallback_attempts: int = 10

    # ============ CORS / 静态文件 ============
    cors_origins: List[str] = ["*"]
    static_dir: str = "public"

    # ============ 日志 ============
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/dictionary.log"
    log_rotation: str = "10 MB"

    # ============ 抓取 ============
    request_timeout: float = 30.0
    connect_timeout: float = 10.0

    # 同一词典源两次请求的间隔（秒）
    v1_min_delay: float = 1.5
    v1_max_delay: float = 4.0
    v2_min_delay: float = 2.0
    v2_max_delay: float = 5.0

    # ============ 聚合 ============
    fallback_to_all_sources: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def delay_range(self, version: str) -> tuple:
        """指定 schema 版本（"v1" / "v2"）的 (最小, 最大) 请求间隔"""
        if str(version) == "v1":
            return self.v1_min_delay, self.v1_max_delay
        return self.v2_min_delay, self.v2_max_delay


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """获取全局配置实例"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """丢弃缓存的实例，下次 get_settings() 重新读取环境变量"""
    global _settings
    _settings = None


def validate_config(settings: Optional[Settings] = None) -> None:
    """
    校验配置取值范围

    Raises:
        ValueError: 列出所有无效的配置项
    """
    settings = settings or get_settings()
    errors = []

    for version in ("v1", "v2"):
        low, high = settings.delay_range(version)
        if low < 0 or high < 0:
            errors.append(f"{version} request delays must not be negative")
        if low > high:
            errors.append(f"{version}_min_delay must not exceed {version}_max_delay")

    if not (1 <= settings.api_port <= 65535):
        errors.append("api_port must be between 1 and 65535")

    if settings.port_fallback_attempts < 1:
        errors.append("port_fallback_attempts must be at least 1")

    if settings.request_timeout <= 0 or settings.connect_timeout <= 0:
        errors.append("timeouts must be positive")

    if errors:
        raise ValueError("Invalid configuration:\n" + "\n".join(f"- {error}" for error in errors))

    logger.debug("Configuration validated")
