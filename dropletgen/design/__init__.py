"""
Experiment design generation: level designs, range sweeps, value mapping,
ratio normalization and droplet assembly.
"""
from dropletgen.design.levels import build_level_design, design_size
from dropletgen.design.interpolate import interpolate_range
from dropletgen.design.mapping import map_level, map_design
from dropletgen.design.normalize import normalize_ratios, ratio_sum, max_ratio_sum, balancing_candidates
from dropletgen.design.assemble import assemble_droplet, batch_id_factory
from dropletgen.design.generate import (
    generate_factorial_droplets,
    generate_interpolated_droplets,
    require_droplets,
)

__all__ = [
    "build_level_design",
    "design_size",
    "interpolate_range",
    "map_level",
    "map_design",
    "normalize_ratios",
    "ratio_sum",
    "max_ratio_sum",
    "balancing_candidates",
    "assemble_droplet",
    "batch_id_factory",
    "generate_factorial_droplets",
    "generate_interpolated_droplets",
    "require_droplets",
]
