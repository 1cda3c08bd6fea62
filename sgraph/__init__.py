"""Scene graph core: scenes and components, page allocators, math types, colours, hashing, scope guards and QOI decoding."""

__version__ = "0.1.0"