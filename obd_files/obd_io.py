"""
Interchange file I/O.
"""

from pathlib import Path
from typing import Mapping, Optional, Union

import numpy as np

from data import DEFAULT_CLIENT_VERSION, read_file_to_bytes, write_bytes_to_file
from asset_files import Thing
from .obd_codec import ObdThing, decode_obd, encode_obd


def read_obd(obd_input: Union[Path, bytes]) -> ObdThing:
    """
    Decode an interchange file from a path or raw bytes.
    """
    if isinstance(obd_input, (bytes, bytearray)):
        rawdata = bytes(obd_input)
    else:
        rawdata = read_file_to_bytes(obd_input)
    return decode_obd(rawdata)


def write_obd(
    thing: Thing,
    pixels: Mapping[int, np.ndarray],
    output_path: Optional[Path] = None,
    client_version: int = DEFAULT_CLIENT_VERSION,
) -> bytes:
    """
    Encode a thing and optionally write it to output_path.

    Returns:
        The compressed interchange bytes
    """
    obd_bytes = encode_obd(thing, pixels, client_version)

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        write_bytes_to_file(output_path, obd_bytes)

    return obd_bytes
