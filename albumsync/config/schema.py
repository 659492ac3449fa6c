# AlbumSync Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class SyncSettings(BaseModel):
    """Policy knobs consulted while matching, classifying and executing."""

    exclude_videos: bool = Field(default=False, description="Skip remote items carrying more than one media part")
    skip_extensions: list[str] = Field(
        default_factory=lambda: [".mov"],
        description="File extensions never synchronised in either direction",
    )
    timestamp_tolerance: float = Field(
        default=2.0,
        ge=0,
        description="Seconds within which local and remote timestamps count as equal",
    )
    compare_checksums: bool = Field(default=True, description="Treat equal checksums as unchanged")
    min_free_disk_percent: float = Field(
        default=2.0,
        ge=0,
        le=100,
        description="Downloads stop once free disk space drops to this percentage",
    )
    max_age_days: int | None = Field(
        default=None,
        ge=1,
        description="Only sync items changed within this many days. None = no cutoff.",
    )

    @field_validator("skip_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Lowercase extensions and make sure they start with a dot."""
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]


class RemoteConfig(BaseModel):
    """Settings for the folder-backed remote album store."""

    path: str = Field(description="Root directory of the remote album store")
    trash_album: str = Field(default="Recycle Bin", description="Title of the album holding deleted items")

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    log_file: str | None = Field(default=None, description="Path to log file")

    @field_validator("log_file")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ in optional path."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class AlbumSyncConfig(BaseModel):
    """Root configuration model for AlbumSync."""

    photo_root: str = Field(description="Local directory holding one subdirectory per album")
    remote: RemoteConfig = Field(description="Remote store settings")
    sync: SyncSettings = Field(default_factory=SyncSettings, description="Sync policy")
    exclude_albums: list[str] = Field(default_factory=list, description="Album titles never synchronised")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @field_validator("photo_root")
    @classmethod
    def expand_photo_root(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())

    @property
    def photo_root_path(self) -> Path:
        """Local photo root as a Path."""
        return Path(self.photo_root)

    def is_album_excluded(self, title: str) -> bool:
        """Check if an album title is excluded (case-insensitive)."""
        return title.lower() in {name.lower() for name in self.exclude_albums}
