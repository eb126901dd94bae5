#!filepath: scenarios/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .run_config import RunConfig

# 环境变量 → (section, field)
ENV_OVERRIDES = {
    "SCENARIOS_LOG_LEVEL": ("log", "level"),
    "SCENARIOS_LOG_DIR": ("log", "dir"),
    "SCENARIOS_JOBS": ("run", "jobs"),
    "SCENARIOS_DELIMITER": ("run", "delimiter"),
}


def package_root() -> str:
    """
    返回包目录（基于当前文件位置推导）:
    scenarios/config/app_config.py → scenarios/config → scenarios
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def default_config_path() -> str:
    return os.path.join(package_root(), "config", "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    run: RunConfig = Field(default_factory=RunConfig)

    @classmethod
    def load(cls, path: str | None = None, env_file: str | None = ".env") -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 <package>/config/base.yml
        - .env 从当前工作目录读取（不存在则跳过）
        - SCENARIOS_* 环境变量覆盖 YAML 中的值
        """
        # 1) 先加载 .env（不覆盖已存在的环境变量）
        if env_file:
            load_dotenv(env_file, override=False)

        # 2) 决定配置文件路径
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) 环境变量覆盖
        for env_name, (section, field) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is not None:
                raw.setdefault(section, {})[field] = value

        return cls(**raw)
