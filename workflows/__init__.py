"""
Batch workflows used by the command-line scripts
"""

from .utils import load_settings, print_banner, print_summary
from .catalogue_tasks import catalogue_info_process, compact_atlas_process
from .obd_tasks import export_obd_process, import_obd_process
from .sprite_tasks import extract_sprites_process, parse_id_list

__all__ = [
    # Utils
    "load_settings",
    "print_banner",
    "print_summary",
    # Catalogue
    "catalogue_info_process",
    "compact_atlas_process",
    # OBD
    "export_obd_process",
    "import_obd_process",
    # Sprites
    "extract_sprites_process",
    "parse_id_list",
]
