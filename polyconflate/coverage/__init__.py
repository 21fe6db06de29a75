"""Coverage vertex network and shell snapping."""

from .vertex import Vertex, Shell, VertexSnapNetwork
from .snap import SnapResult, snap_shells

__all__ = [
    'Vertex',
    'Shell',
    'VertexSnapNetwork',
    'SnapResult',
    'snap_shells',
]
