# sgraph

`sgraph` is a small scene-graph core library written in pure Python. It has no dependencies
outside the standard library.

## What is in it

- **Scenes** are in `sgraph.scene`.
  - A `Scene` holds a tree of `SceneObject` handles under a hidden root. Use `root_object()`, `add_object()` and `objects()` to reach it.
  - A `SceneObject` can navigate the tree: `parent`, `first_child`, `last_child`, `child_at`, `next_sibling` and `prev_sibling`.
  - It can change the tree: `append_child`, `prepend_child`, `insert_child_at`, `insert_after`, `insert_before`, `remove_child_at`, `remove_children` and `remove_from_parent`.
  - It can walk the tree: `ancestors`, `descendants` and `walk_children`. `walk_children` takes an `EnumDirection` and an `EnumCallOrder`.
  - It can work with components: `add_component`, `find_component*` and `components*`.
  - It can send messages: `send_message` and `broadcast_message`.
  - A handle with no node is false, and calling it does nothing.
- **Components** are in `sgraph.component`.
  - Subclass `Component` and override `added`, `removed` and `apply`.
  - A component's type is its class name, given by `type_name()`.
  - `ComponentList.broadcast_message` sends a `ComponentMessage` to each component. A component marked with `remove()` is dropped from the list and gets `REMOVED` instead.
  - `ComponentFactory` makes components from registered classes by type name. Registering the same name twice raises `ValueError`.
- **Page allocators** are in `sgraph.memory`.
  - `PoolAllocator` and `MonotonicAllocator` grow page by page. Pages that become empty are kept for reuse until `dispose_free_pages()` is called.
  - `StaticPoolAllocator` and `StaticMonotonicAllocator` are limited to one page. They raise `MemoryError` when that page is full.
  - `NullAllocator` never hands out memory.
  - `allocate` returns a `Block`. `Block.memory` is a writable `memoryview` of its bytes.
  - `get_allocator(block)` returns the allocator that owns a block.
  - The helpers `align_up` and `align_down` round values to a power-of-two alignment.
- **Math types** are frozen dataclasses.
  - `sgraph.vectors` has `Vector2`, `Vector3` and `Vector4`.
  - `sgraph.quaternion` has `Quaternion`.
  - `sgraph.matrices` has `Matrix32`, `Matrix4`, `Transform2D` and `Transform`, with their constructors.
  - `sgraph.shapes` has `Sphere` and `Plane`.
- **Colours** are in `sgraph.color`.
  - `Color` holds 8 bits per channel, packed with red in the lowest byte.
  - `FloatColor` holds float channels.
  - Both convert to and from `Vector4`.
- **Utilities**:
  - `sgraph.floatutils` compares single-precision floats by ULP distance. It also has `difference_of_products`, `clamp`, `lerp`, `pop_count`, `log2` and `to_byte_array`.
  - `sgraph.murmur` has the MurmurHash3 functions `murmur3_hash32` and `murmur3_hash128`. Text is hashed as UTF-8.
  - `sgraph.scopeguard` has `ScopeGuard` context managers that call a function on leaving a block, whether on success, on failure or both. Build them with `on_scope_exit`, `on_scope_exit_success` and `on_scope_exit_failure`.
- **QOI decoding** is in `sgraph.qoi`.
  - `read_header` parses the header.
  - `decode_pixels` decodes the chunks to 3 or 4 bytes per pixel.
  - `decode` does both.
  - Invalid data raises `QOIError`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
from sgraph.scene import Scene
from sgraph.component import Component, ComponentMessage, ComponentMessageParams

class Hello(Component):
    def apply(self, scene_object):
        print("Hello")

scene = Scene()
obj = scene.add_object()
obj.add_component(Hello())

for scene_object in scene.objects():
    scene_object.broadcast_message(ComponentMessage.APPLY, ComponentMessageParams())
```

```python
from sgraph.memory import PoolAllocator

pool = PoolAllocator(item_size=16, page_items=2)
block = pool.allocate(16)
block.memory[:4] = b"abcd"
assert PoolAllocator.get_allocator(block) is pool
pool.deallocate(block)
```

```python
from sgraph.murmur import murmur3_hash32, murmur3_hash128

murmur3_hash32(b"hello", 0)
murmur3_hash128(b"hello", 0, 0)
```

```python
from sgraph.qoi import decode

with open("image.qoi", "rb") as f:
    header, pixels = decode(f.read(), 4)
```

## What it does not do

- It has no rendering, window or GPU support. Decoded QOI pixels are returned as bytes and are not uploaded anywhere.
- It has no built-in transform component.
- The matrix types provide constructors and transposition only. There is no matrix multiplication, inversion or decomposition.
- There is no quaternion multiplication, and vectors cannot be transformed by matrices.
- There is no frustum culling.
- It is a library only: it installs no command-line program.