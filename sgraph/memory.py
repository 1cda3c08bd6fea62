"""Paged block allocators: fixed-size pools and stack-like monotonic arenas.

Allocations are handed out as :class:`Block` handles that name the page they
live in and their offset inside it.  A block gives access to its bytes through
:attr:`Block.memory`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

__all__ = [
    "align_up",
    "align_down",
    "Block",
    "PoolPage",
    "MonotonicPage",
    "BasicAllocator",
    "BasicStaticAllocator",
    "PoolAllocator",
    "MonotonicAllocator",
    "StaticPoolAllocator",
    "StaticMonotonicAllocator",
    "NullAllocator",
]

# Bytes taken by a monotonic page's own bookkeeping (links, owner, stack index).
_MONOTONIC_PAGE_HEADER_SIZE = 32
_MONOTONIC_PAGE_HEADER_ALIGN = 8
# Header placed in front of every monotonic block: page offset and stack index.
_ITEM_HEADER_SIZE = 8
_ITEM_HEADER_ALIGN = 4
# Each watermark on the page's stack is a 32-bit value.
_WATERMARK_SIZE = 4
# Largest alignment a monotonic page accepts.
_MONOTONIC_MAX_ALIGN = 16384
_MAX_POOL_ITEMS = 0xFFFF
_POOL_INDEX_SIZE = 2


def _is_power_of_two(value: int) -> bool:
    return value > 0 and not value & (value - 1)


def _check_align(align: int) -> None:
    if not _is_power_of_two(align):
        raise ValueError(f"align must be a non-zero power of two, got {align}")


def align_up(value: int, align: int) -> int:
    """Round ``value`` up to a multiple of the power of two ``align``."""
    mask = align - 1
    return (value + mask) & ~mask


def align_down(value: int, align: int) -> int:
    """Round ``value`` down to a multiple of the power of two ``align``."""
    return value & ~(align - 1)


class _Page(Protocol):
    allocator: Any
    max_size: int
    max_align: int

    def try_allocate(self, size: int, align: int) -> "Block | None": ...
    def deallocate(self, block: "Block") -> None: ...
    def is_empty(self) -> bool: ...
    def is_single(self) -> bool: ...
    def _view(self, offset: int, size: int) -> memoryview: ...


@dataclass(frozen=True)
class Block:
    """An allocated block: the page holding it, its offset there and its size."""

    page: Any = field(repr=False)
    offset: int
    size: int

    @property
    def memory(self) -> memoryview:
        """Writable view of the block's bytes."""
        return self.page._view(self.offset, self.size)


class PoolPage:
    """A page of ``page_items`` equally sized slots kept on a free list."""

    def __init__(self, allocator: Any, size: int, align: int, page_items: int) -> None:
        _check_align(align)
        if not 0 < page_items <= _MAX_POOL_ITEMS:
            raise ValueError(f"page_items must be in [1, {_MAX_POOL_ITEMS}], got {page_items}")
        if size < _POOL_INDEX_SIZE:
            raise ValueError(f"item size must be at least {_POOL_INDEX_SIZE} bytes, got {size}")
        self.allocator = allocator
        self.max_size = size
        self.max_align = align
        self.page_items = page_items
        self._stride = align_up(size, align)
        self._storage = bytearray(self._stride * page_items)
        self._next_free = list(range(1, page_items + 1))
        self._free_head = 0
        self._in_use = [False] * page_items
        self._allocated_count = 0

    def try_allocate(self, size: int, align: int) -> Block | None:
        """Take a slot from the free list, or return None when the page is full.

        Every slot has the page's item size, so ``size`` and ``align`` are not consulted.
        """
        if self._free_head >= self.page_items:
            return None
        index = self._free_head
        self._free_head = self._next_free[index]
        self._in_use[index] = True
        self._allocated_count += 1
        return Block(self, index * self._stride, self.max_size)

    def deallocate(self, block: Block) -> None:
        """Put the block's slot back at the head of the free list."""
        if block.page is not self:
            raise ValueError("block does not belong to this page")
        index, rest = divmod(block.offset, self._stride)
        if rest or not 0 <= index < self.page_items or not self._in_use[index]:
            raise ValueError("block is not allocated from this page")
        self._in_use[index] = False
        self._next_free[index] = self._free_head
        self._free_head = index
        self._allocated_count -= 1

    def is_empty(self) -> bool:
        return self._allocated_count == 0

    def is_single(self) -> bool:
        """Tell whether this is the only page its allocator has in use."""
        return self.allocator is None or self.allocator._is_sole_page(self)

    def _view(self, offset: int, size: int) -> memoryview:
        return memoryview(self._storage)[offset:offset + size]


def _monotonic_capacity(page_bytes: int) -> int:
    if page_bytes % _MONOTONIC_PAGE_HEADER_ALIGN:
        raise ValueError(
            f"page_bytes must be a multiple of {_MONOTONIC_PAGE_HEADER_ALIGN}, got {page_bytes}"
        )
    mask = _MONOTONIC_PAGE_HEADER_ALIGN - 1
    capacity = (page_bytes - _MONOTONIC_PAGE_HEADER_SIZE + mask) & ~mask
    if capacity <= 0:
        raise ValueError("not enough page_bytes to hold page header and data")
    return capacity


class MonotonicPage:
    """A page that hands out blocks bottom-up and tracks them on a stack of watermarks.

    Space is reclaimed only when the most recent live block is released; blocks
    freed out of order are reclaimed together with it.
    """

    def __init__(self, allocator: Any, page_bytes: int) -> None:
        self.allocator = allocator
        self.max_size = _monotonic_capacity(page_bytes)
        self.max_align = _MONOTONIC_MAX_ALIGN
        self._storage = bytearray(self.max_size)
        self._stack_top = align_down(self.max_size, _WATERMARK_SIZE)
        # Watermark of each stack entry, oldest first; 0 marks a released entry.
        self._watermarks: list[int] = []
        self._stack_index_of: dict[int, int] = {}

    def try_allocate(self, size: int, align: int) -> Block | None:
        """Place a block above the current watermark, or return None if it does not fit."""
        _check_align(align)
        stack_index = len(self._watermarks)
        stack_pointer = self._stack_top - _WATERMARK_SIZE * stack_index
        start = self._watermarks[-1] if stack_index else 0
        offset = align_up(start, _ITEM_HEADER_ALIGN) + _ITEM_HEADER_SIZE
        offset = align_up(offset, align)
        watermark = offset + size
        if watermark > stack_pointer - _WATERMARK_SIZE:
            return None
        self._watermarks.append(watermark)
        self._stack_index_of[offset] = stack_index + 1
        return Block(self, offset, size)

    def deallocate(self, block: Block) -> None:
        """Release the block, popping every released entry off the top of the stack."""
        if block.page is not self:
            raise ValueError("block does not belong to this page")
        try:
            stack_index = self._stack_index_of.pop(block.offset)
        except KeyError:
            raise ValueError("block is not allocated from this page") from None
        self._watermarks[stack_index - 1] = 0
        if stack_index == len(self._watermarks):
            while self._watermarks and not self._watermarks[-1]:
                self._watermarks.pop()

    def is_empty(self) -> bool:
        return not self._watermarks

    def is_single(self) -> bool:
        """Tell whether this is the only page its allocator has in use."""
        return self.allocator is None or self.allocator._is_sole_page(self)

    def _view(self, offset: int, size: int) -> memoryview:
        return memoryview(self._storage)[offset:offset + size]


PageFactory = Callable[[Any], _Page]


class BasicAllocator:
    """Allocator that grows by pages and keeps emptied extra pages for reuse."""

    def __init__(self, page_factory: PageFactory, max_size: int, max_align: int) -> None:
        self._page_factory = page_factory
        self.max_size = max_size
        self.max_align = max_align
        self._pages: list[_Page] = []  # newest first
        self._free_pages: list[_Page] = []

    @staticmethod
    def get_allocator(block: Block) -> Any:
        """Return the allocator that owns ``block``."""
        return block.page.allocator

    def allocate(self, size: int, align: int = 1) -> Block:
        """Allocate ``size`` bytes aligned to ``align``, adding a page when needed."""
        if size > self.max_size or align > self.max_align:
            raise ValueError(
                f"request of {size} bytes aligned to {align} exceeds "
                f"{self.max_size} bytes aligned to {self.max_align}"
            )
        for page in self._pages:
            block = page.try_allocate(size, align)
            if block is not None:
                return block
        page = self._free_pages.pop() if self._free_pages else self._page_factory(self)
        block = page.try_allocate(size, align)
        if block is None:
            self._free_pages.append(page)
            raise MemoryError(f"{size} bytes do not fit in an empty page")
        self._pages.insert(0, page)
        return block

    def deallocate(self, block: Block | None) -> None:
        """Release ``block``; None is accepted and ignored."""
        if block is None:
            return
        page = block.page
        if page.allocator is not self:
            raise ValueError("block was not allocated by this allocator")
        page.deallocate(block)
        if not page.is_single() and page.is_empty():
            self._pages.remove(page)
            self._free_pages.append(page)

    def dispose_free_pages(self) -> None:
        """Drop the pages kept for reuse."""
        self._free_pages.clear()

    def _is_sole_page(self, page: _Page) -> bool:
        return len(self._pages) == 1 and self._pages[0] is page


class BasicStaticAllocator:
    """Allocator limited to a single page made up front."""

    def __init__(self, page_factory: PageFactory, max_size: int, max_align: int) -> None:
        self._page_factory = page_factory
        self.max_size = max_size
        self.max_align = max_align
        self._page = page_factory(self)

    @staticmethod
    def get_allocator(block: Block) -> Any:
        """Return the allocator that owns ``block``."""
        return block.page.allocator

    def allocate(self, size: int, align: int = 1) -> Block:
        """Allocate from the single page; raise MemoryError when it is full."""
        if size > self.max_size or align > self.max_align:
            raise ValueError(
                f"request of {size} bytes aligned to {align} exceeds "
                f"{self.max_size} bytes aligned to {self.max_align}"
            )
        block = self._page.try_allocate(size, align)
        if block is None:
            raise MemoryError("static allocator is full")
        return block

    def deallocate(self, block: Block | None) -> None:
        """Release ``block``; None is accepted and ignored."""
        if block is None:
            return
        if block.page is not self._page:
            raise ValueError("block was not allocated by this allocator")
        self._page.deallocate(block)

    def dispose_free_pages(self) -> None:
        """Replace the single page with a fresh one when it holds no live block."""
        if self._page.is_empty():
            self._page = self._page_factory(self)

    def _is_sole_page(self, page: _Page) -> bool:
        return page is self._page


class PoolAllocator(BasicAllocator):
    """Growing pool of ``item_size`` byte slots, ``page_items`` per page."""

    def __init__(self, item_size: int, page_items: int, align: int = 8) -> None:
        PoolPage(None, item_size, align, page_items)  # validate the parameters early
        super().__init__(
            lambda owner: PoolPage(owner, item_size, align, page_items), item_size, align
        )


class MonotonicAllocator(BasicAllocator):
    """Growing monotonic arena made of pages of ``page_bytes`` bytes."""

    def __init__(self, page_bytes: int) -> None:
        capacity = _monotonic_capacity(page_bytes)
        super().__init__(
            lambda owner: MonotonicPage(owner, page_bytes), capacity, _MONOTONIC_MAX_ALIGN
        )


class StaticPoolAllocator(BasicStaticAllocator):
    """Pool of ``page_items`` slots of ``item_size`` bytes that never grows."""

    def __init__(self, item_size: int, page_items: int, align: int = 8) -> None:
        super().__init__(
            lambda owner: PoolPage(owner, item_size, align, page_items), item_size, align
        )


class StaticMonotonicAllocator(BasicStaticAllocator):
    """Monotonic arena of a single page of ``page_bytes`` bytes."""

    def __init__(self, page_bytes: int) -> None:
        capacity = _monotonic_capacity(page_bytes)
        super().__init__(
            lambda owner: MonotonicPage(owner, page_bytes), capacity, _MONOTONIC_MAX_ALIGN
        )


class NullAllocator:
    """Allocator that never hands out memory; in strict mode any call is an error."""

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def allocate(self, size: int, align: int = 1) -> None:
        if self._strict:
            raise RuntimeError("NullAllocator.allocate should not be called")
        return None

    def deallocate(self, block: Block | None) -> None:
        if self._strict:
            raise RuntimeError("NullAllocator.deallocate should not be called")