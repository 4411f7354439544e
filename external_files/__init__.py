"""
External files utility module for exporting and importing sprite images.
"""

from .images import (
    sprite_to_image,
    image_to_bitmap,
    export_sprite_png,
    import_sprite_png,
    export_thing_sprites,
    compose_frame,
)

__all__ = [
    "sprite_to_image",
    "image_to_bitmap",
    "export_sprite_png",
    "import_sprite_png",
    "export_thing_sprites",
    "compose_frame",
]
