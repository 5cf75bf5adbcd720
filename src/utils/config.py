"""Configuration parameters for stream processing and prompt construction."""

import os
from typing import Dict, Any


class Config:
    """Configuration class for stream decoding and fence extraction parameters."""

    # Frame decoding limits
    DECODE_CARRY_LIMIT = int(os.getenv('DECODE_CARRY_LIMIT', '10240'))  # Unparsed payload text kept across records
    DECODE_LINE_LIMIT = int(os.getenv('DECODE_LINE_LIMIT', '65536'))  # Unterminated record kept across chunks

    # Fence extraction
    FENCE_MARKER = '```'
    FENCE_LANGUAGE = os.getenv('FENCE_LANGUAGE', 'mermaid')

    # Prompt limits
    MAX_NODES = int(os.getenv('MAX_NODES', '40'))
    MAX_EDGES = int(os.getenv('MAX_EDGES', '80'))
    FLOW_DIRECTION = os.getenv('FLOW_DIRECTION', 'TD')

    @classmethod
    def to_dict(cls) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'decode_carry_limit': cls.DECODE_CARRY_LIMIT,
            'decode_line_limit': cls.DECODE_LINE_LIMIT,
            'fence_marker': cls.FENCE_MARKER,
            'fence_language': cls.FENCE_LANGUAGE,
            'max_nodes': cls.MAX_NODES,
            'max_edges': cls.MAX_EDGES,
            'flow_direction': cls.FLOW_DIRECTION
        }
