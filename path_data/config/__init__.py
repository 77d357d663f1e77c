"""Configuration management module."""

import sys
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, List
from dataclasses import dataclass, field
from loguru import logger


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | <level>{message}</level>"
)

LOG_LEVELS = ['TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class PathDataConfig:
    """Configuration for path data conversion.
    
    Attributes:
        # Diagnostics
        debug_sample_limit: Maximum Cartesian samples rendered by debug_string
        log_level: Logging level for configure_logging
        
        # Frenet transform
        singularity_epsilon: Reject samples with |1 - kappa_r * l| below this
        
        # Reference line projection
        projection_samples: Coarse samples used to seed nearest-point search
        projection_tolerance: Longitudinal slack allowed past either end [m]
        max_lateral_offset: Reject projections farther than this [m], None to disable
        
        # Reference path
        reference_waypoints_x: X coordinates of waypoints
        reference_waypoints_y: Y coordinates of waypoints
        
        # Input path (scenario files only, at most one of the two)
        cartesian_path: List of [x, y] samples
        frenet_path: List of [s, l] or [s, l, dl, ddl] samples
    """
    # Diagnostics
    debug_sample_limit: int = 10
    log_level: str = 'INFO'
    
    # Frenet transform
    singularity_epsilon: float = 1.0e-6
    
    # Reference line projection
    projection_samples: int = 1000
    projection_tolerance: float = 1.0e-3
    max_lateral_offset: Optional[float] = None
    
    # Reference path
    reference_waypoints_x: list = field(default_factory=list)
    reference_waypoints_y: list = field(default_factory=list)
    
    # Input path
    cartesian_path: list = field(default_factory=list)
    frenet_path: list = field(default_factory=list)
    
    # Internal: loaded from
    config_path: Optional[str] = None


class ConfigValidationError(ValueError):
    """Raised when configuration validation fails."""
    pass


def validate_config(config: PathDataConfig) -> None:
    """Validate configuration values for consistency and correctness.
    
    Args:
        config: Configuration to validate
        
    Raises:
        ConfigValidationError: If validation fails
    """
    errors: List[str] = []
    
    # Diagnostics
    if config.debug_sample_limit < 0:
        errors.append(f"debug_sample_limit must be non-negative, got {config.debug_sample_limit}")
    if str(config.log_level).upper() not in LOG_LEVELS:
        errors.append(f"log_level must be one of {LOG_LEVELS}, got '{config.log_level}'")
    
    # Frenet transform
    if config.singularity_epsilon <= 0:
        errors.append(f"singularity_epsilon must be positive, got {config.singularity_epsilon}")
    
    # Projection
    if config.projection_samples < 2:
        errors.append(f"projection_samples must be at least 2, got {config.projection_samples}")
    if config.projection_tolerance < 0:
        errors.append(f"projection_tolerance must be non-negative, got {config.projection_tolerance}")
    if config.max_lateral_offset is not None and config.max_lateral_offset <= 0:
        errors.append(f"max_lateral_offset must be positive or null, got {config.max_lateral_offset}")
    
    # Reference path (optional, but must be well formed when present)
    n_x = len(config.reference_waypoints_x)
    n_y = len(config.reference_waypoints_y)
    if n_x != n_y:
        errors.append(f"reference_waypoints_x ({n_x}) and reference_waypoints_y ({n_y}) must have the same length")
    elif 0 < n_x < 2:
        errors.append(f"reference waypoints must have at least 2 points, got {n_x}")
    
    # Input path
    if config.cartesian_path and config.frenet_path:
        errors.append("At most one of cartesian_path and frenet_path may be given")
    for i, point in enumerate(config.cartesian_path):
        if len(point) != 2:
            errors.append(f"cartesian_path[{i}] must have 2 elements [x, y], got {len(point)}")
    for i, point in enumerate(config.frenet_path):
        if len(point) not in (2, 4):
            errors.append(f"frenet_path[{i}] must have 2 or 4 elements [s, l, (dl, ddl)], got {len(point)}")
    if (config.cartesian_path or config.frenet_path) and n_x == 0:
        errors.append("reference waypoints are required when a path is given")
    
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigValidationError(error_msg)


def load_config(config_path: str) -> PathDataConfig:
    """Load configuration from YAML file.
    
    Args:
        config_path: Path to YAML configuration file
        
    Returns:
        Loaded configuration
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    
    try:
        with open(config_path, 'r') as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {config_path}: {e}") from e
    
    if config_dict is None:
        raise ValueError(f"YAML file {config_path} is empty or contains no valid content")
    
    try:
        config = PathDataConfig(**config_dict)
    except TypeError as e:
        raise ValueError(f"Invalid configuration structure in {config_path}: {e}") from e
    
    config.config_path = str(config_path)
    
    try:
        validate_config(config)
    except ConfigValidationError:
        logger.error(f"Configuration validation failed for {config_path}")
        raise
    
    logger.info(f"Configuration loaded and validated from {config_path}")
    
    return config


def save_config(config: PathDataConfig, config_path: str):
    """Save configuration to YAML file.
    
    Args:
        config: Configuration to save
        config_path: Path to save YAML file
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    
    config_dict: Dict[str, Any] = {
        'debug_sample_limit': config.debug_sample_limit,
        'log_level': config.log_level,
        'singularity_epsilon': config.singularity_epsilon,
        'projection_samples': config.projection_samples,
        'projection_tolerance': config.projection_tolerance,
        'max_lateral_offset': config.max_lateral_offset,
        'reference_waypoints_x': list(config.reference_waypoints_x),
        'reference_waypoints_y': list(config.reference_waypoints_y),
        'cartesian_path': [list(p) for p in config.cartesian_path],
        'frenet_path': [list(p) for p in config.frenet_path],
    }
    
    with open(config_path, 'w') as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)
    
    logger.info(f"Configuration saved to {config_path}")


def configure_logging(level: str = 'INFO') -> None:
    """Replace loguru's default sink with a single stderr sink at level."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())
