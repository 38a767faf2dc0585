r"""
'     _______  .___ _______    _______
'     \   _  \ |   |\      \   \      \
'     /  /_\  \|   |/   |   \  /   |   \
'     \  \_/.  \   /    |    \/    |    \
'      \_____\ \___\____|__  /\____|__  /
'             \__>         \/         \/
"""

# expose the main classes
from .enumerable import Enumerable, OrderedEnumerable

# expose the factory functions
from .factories import (
    from_iterable,
    from_async_iterable,
    from_range,
    repeat,
    empty,
    qinn,
    Q
)

# expose supporting types
from .types import (
    Capability,
    ModeMismatchError,
    DuplicateKeyWarning,
    canonical_key
)

# define what `import *` does
__all__ = [
    "Enumerable",
    "OrderedEnumerable",
    "from_iterable",
    "from_async_iterable",
    "from_range",
    "repeat",
    "empty",
    "qinn",
    "Q",
    "Capability",
    "ModeMismatchError",
    "DuplicateKeyWarning",
    "canonical_key"
]
