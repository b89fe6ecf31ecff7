"""Configuration management for Sohodemo.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "sohodemo.toml"

DEFAULT_SITE_SEARCH_URL = "http://usmvvwdev53/search/results"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 4000
    basepath: str = "/"


@dataclass
class ViewsConfig:
    """Page template configuration."""

    views_dir: Path = field(default_factory=lambda: Path("views"))
    public_dir: Path = field(default_factory=lambda: Path("public"))
    sort_listings: bool = False
    exclude: list[str] = field(default_factory=list)


@dataclass
class ApiConfig:
    """Mock API configuration."""

    data_dir: Path | None = field(default_factory=lambda: Path("demoapp/data"))
    site_search_url: str = DEFAULT_SITE_SEARCH_URL
    timeout: float = 10.0


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True
    watch_patterns: list[str] | None = None


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    views: ViewsConfig
    api: ApiConfig
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for sohodemo.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            views=ViewsConfig(),
            api=ApiConfig(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            views=cls._parse_views(data.get("views"), config_dir),
            api=cls._parse_api(data.get("api"), config_dir),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 4000)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        basepath = data.get("basepath", "/")
        if not isinstance(basepath, str):
            raise ValueError("server.basepath must be a string")

        return ServerConfig(host=host, port=port, basepath=basepath)

    @classmethod
    def _parse_views(cls, data: object, config_dir: Path) -> ViewsConfig:
        """Parse views configuration section.

        Args:
            data: Raw views section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ViewsConfig instance
        """
        if data is None:
            return ViewsConfig(
                views_dir=config_dir / "views",
                public_dir=config_dir / "public",
            )

        if not isinstance(data, dict):
            raise ValueError("views section must be a dictionary")

        views_dir = data.get("views_dir", "views")
        if not isinstance(views_dir, str):
            raise ValueError("views.views_dir must be a string")

        public_dir = data.get("public_dir", "public")
        if not isinstance(public_dir, str):
            raise ValueError("views.public_dir must be a string")

        sort_listings = data.get("sort_listings", False)
        if not isinstance(sort_listings, bool):
            raise ValueError("views.sort_listings must be a boolean")

        exclude_raw = data.get("exclude", [])
        if not isinstance(exclude_raw, list):
            raise ValueError("views.exclude must be a list")
        exclude: list[str] = []
        for item in exclude_raw:
            if not isinstance(item, str):
                raise ValueError("views.exclude items must be strings")
            exclude.append(item)

        return ViewsConfig(
            views_dir=config_dir / views_dir,
            public_dir=config_dir / public_dir,
            sort_listings=sort_listings,
            exclude=exclude,
        )

    @classmethod
    def _parse_api(cls, data: object, config_dir: Path) -> ApiConfig:
        """Parse api configuration section.

        Args:
            data: Raw api section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ApiConfig instance
        """
        if data is None:
            return ApiConfig(data_dir=config_dir / "demoapp" / "data")

        if not isinstance(data, dict):
            raise ValueError("api section must be a dictionary")

        data_dir = data.get("data_dir", "demoapp/data")
        if not isinstance(data_dir, str):
            raise ValueError("api.data_dir must be a string")

        site_search_url = data.get("site_search_url", DEFAULT_SITE_SEARCH_URL)
        if not isinstance(site_search_url, str):
            raise ValueError("api.site_search_url must be a string")

        timeout = data.get("timeout", 10.0)
        if not isinstance(timeout, int | float) or isinstance(timeout, bool):
            raise ValueError("api.timeout must be a number")

        return ApiConfig(
            data_dir=config_dir / data_dir,
            site_search_url=site_search_url,
            timeout=float(timeout),
        )

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section.

        Args:
            data: Raw live_reload section data

        Returns:
            LiveReloadConfig instance
        """
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        watch_patterns_raw = data.get("watch_patterns")
        watch_patterns: list[str] | None = None
        if watch_patterns_raw is not None:
            if not isinstance(watch_patterns_raw, list):
                raise ValueError("live_reload.watch_patterns must be a list")
            watch_patterns = []
            for item in watch_patterns_raw:
                if not isinstance(item, str):
                    raise ValueError("live_reload.watch_patterns items must be strings")
                watch_patterns.append(item)

        return LiveReloadConfig(enabled=enabled, watch_patterns=watch_patterns)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        basepath: str | None = None,
        views_dir: Path | None = None,
        public_dir: Path | None = None,
        data_dir: Path | None = None,
        live_reload_enabled: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. This follows
        the immutable pattern - the original Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            basepath: Override server.basepath
            views_dir: Override views.views_dir
            public_dir: Override views.public_dir
            data_dir: Override api.data_dir
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = replace(
            self.server,
            host=host if host is not None else self.server.host,
            port=port if port is not None else self.server.port,
            basepath=basepath if basepath is not None else self.server.basepath,
        )

        views = replace(
            self.views,
            views_dir=views_dir if views_dir is not None else self.views.views_dir,
            public_dir=public_dir if public_dir is not None else self.views.public_dir,
        )

        api = self.api
        if data_dir is not None:
            api = replace(self.api, data_dir=data_dir)

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(
            self,
            server=server,
            views=views,
            api=api,
            live_reload=live_reload,
        )
