"""Tree cloning backends used to populate fork directories."""

from .cloner import CopyOnWriteCloner, PortableCloner, create_cloner

__all__ = [
    'CopyOnWriteCloner',
    'PortableCloner',
    'create_cloner'
]
