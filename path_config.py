from dataclasses import dataclass, field
from typing import Literal, Optional

from path_errors import ConfigurationError

# Available normalization modes
NormalizationMode = Literal[
    "conservative",  # Symlink-safe: never cancels a name against a later ".."
    "aggressive",    # Purely lexical: ".." always cancels the preceding name
]

NORMALIZATION_MODES = ("conservative", "aggressive")

# Default normalization mode - safe in the presence of symlinks
NORMALIZE_MODE: NormalizationMode = "conservative"


@dataclass
class PathConfig:
    """Path handling configuration model.

    Attributes:
        normalize_mode: Normalization mode used when none is given explicitly.
            Options: "conservative", "aggressive"
        preserve_metadata: Whether copies keep permission bits and timestamps
            (as far as the host copy primitive preserves them)
        tmp_root: Directory used by make_tmpname (None = system temp dir)
        follow_leaf_symlinks: Whether containment checks resolve a candidate
            that is itself a symlink. Safe copy always resolves regardless.

    Example:
        >>> config = PathConfig(
        ...     normalize_mode="aggressive",
        ...     preserve_metadata=False,
        ...     tmp_root="/var/tmp",
        ...     follow_leaf_symlinks=True,
        ... )
    """
    normalize_mode: NormalizationMode = field(default=NORMALIZE_MODE)
    preserve_metadata: bool = field(default=True)
    tmp_root: Optional[str] = field(default=None)
    follow_leaf_symlinks: bool = field(default=True)

    def __post_init__(self) -> None:
        if self.normalize_mode not in NORMALIZATION_MODES:
            raise ConfigurationError(
                f"normalize_mode must be one of {NORMALIZATION_MODES}, "
                f"got {self.normalize_mode!r}"
            )


PATH_CONFIG_DEFAULT = PathConfig(
    normalize_mode=NORMALIZE_MODE,
    preserve_metadata=True,       # Keep mode bits and timestamps on copy
    tmp_root=None,                # Use the system temp dir
    follow_leaf_symlinks=True,    # Resolve symlinked candidates
)

# Preset for callers that know their trees contain no symlinks
PATH_CONFIG_LEXICAL = PathConfig(
    normalize_mode="aggressive",  # Cancel name/.. pairs
    preserve_metadata=True,
    tmp_root=None,
    follow_leaf_symlinks=False,   # Compare expanded paths only
)
