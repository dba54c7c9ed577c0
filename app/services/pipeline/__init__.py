"""
Encode/decode pipeline services.

This module layers and unlayers shareable messages:
1. Encodes with a base transform, custom-key shift, password mask and
   metadata descriptor (EncodePipeline)
2. Peels those layers off in reverse, honouring self-destruct state
   (DecodePipeline)
3. Recovers messages without usable metadata by trying every method in a
   fixed order (RecoverySearch)
"""

from app.services.pipeline.decoder import DecodePipeline, DecodeResult
from app.services.pipeline.encoder import EncodePipeline, EncodeResult
from app.services.pipeline.recovery import RecoverySearch, RecoveryResult

__all__ = [
    "DecodePipeline",
    "DecodeResult",
    "EncodePipeline",
    "EncodeResult",
    "RecoverySearch",
    "RecoveryResult",
]
