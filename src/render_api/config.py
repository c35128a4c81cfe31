"""Configuration management via environment variables and YAML."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]


class BrowserConfig(BaseModel):
    """Browser launch configuration."""

    headless: bool = True
    launch_args: list[str] = Field(default_factory=lambda: list(DEFAULT_LAUNCH_ARGS))
    extra_args: list[str] = Field(default_factory=list)

    @property
    def args(self) -> list[str]:
        return [*self.launch_args, *self.extra_args]


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 3000
    service_name: str = "render-api"
    max_concurrent_sessions: int = 4  # 0 disables the cap
    max_body_bytes: int = 10 * 1024 * 1024
    log_level: str = "INFO"


class RecordingConfig(BaseModel):
    """Per-request action log configuration."""

    record_actions: bool = False
    actions_dir: Path = Path("tmp/actions")


class Config(BaseModel):
    """Main configuration class."""

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    recording: RecordingConfig = Field(default_factory=RecordingConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        extra_args = os.getenv("BROWSER_ARGS", "")
        return cls(
            browser=BrowserConfig(
                headless=os.getenv("HEADLESS", "true").lower() == "true",
                extra_args=[a for a in extra_args.split() if a],
            ),
            server=ServerConfig(
                host=os.getenv("HOST", "0.0.0.0"),
                port=int(os.getenv("PORT", "3000")),
                service_name=os.getenv("SERVICE_NAME", "render-api"),
                max_concurrent_sessions=int(os.getenv("MAX_CONCURRENT_SESSIONS", "4")),
                max_body_bytes=int(os.getenv("MAX_BODY_BYTES", str(10 * 1024 * 1024))),
                log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            ),
            recording=RecordingConfig(
                record_actions=os.getenv("RECORD_ACTIONS", "false").lower() == "true",
                actions_dir=Path(os.getenv("ACTIONS_DIR", "tmp/actions")),
            ),
        )

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "Config":
        """Load configuration from YAML file (if exists) merged with env vars.

        Environment variables take precedence over YAML values.
        """
        base_config: dict[str, Any] = {}

        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    base_config = yaml.safe_load(f) or {}

        default_path = Path("config.yml")
        if not config_path and default_path.exists():
            with open(default_path) as f:
                base_config = yaml.safe_load(f) or {}

        config = cls(**base_config) if base_config else cls()

        env_config = cls.from_env()

        # Only explicitly set env vars win over YAML
        if os.getenv("HEADLESS"):
            config.browser.headless = env_config.browser.headless
        if os.getenv("BROWSER_ARGS"):
            config.browser.extra_args = env_config.browser.extra_args
        if os.getenv("HOST"):
            config.server.host = env_config.server.host
        if os.getenv("PORT"):
            config.server.port = env_config.server.port
        if os.getenv("SERVICE_NAME"):
            config.server.service_name = env_config.server.service_name
        if os.getenv("MAX_CONCURRENT_SESSIONS"):
            config.server.max_concurrent_sessions = env_config.server.max_concurrent_sessions
        if os.getenv("MAX_BODY_BYTES"):
            config.server.max_body_bytes = env_config.server.max_body_bytes
        if os.getenv("LOG_LEVEL"):
            config.server.log_level = env_config.server.log_level
        if os.getenv("RECORD_ACTIONS"):
            config.recording.record_actions = env_config.recording.record_actions
        if os.getenv("ACTIONS_DIR"):
            config.recording.actions_dir = env_config.recording.actions_dir

        return config

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
