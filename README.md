# astrokit

astrokit is a small toolkit for simple 3D game-style simulations. It has these modules:

- `astrokit.vecmath` has the immutable types `Vec3`, `Mat3` and `Quaternion`.
  - `Vec3` supports `+`, `-`, scalar and component-wise `*` and `/`, `dot`, `cross`, `magnitude` and `normalized`.
  - `Mat3.transform` multiplies the matrix by a vector, and so does the `@` operator.
  - `Quaternion` supports multiplication, `normalized`, `matrix` and `rotate`.
  - Normalizing a zero vector or a zero quaternion raises `ValueError`.
- `astrokit.events` has `Event`, a registry of callbacks grouped by event type.
  - `add_listener` returns a `ListenerHandle`.
  - `remove_listener(handle)` reports whether the listener was registered.
  - `invoke` calls every listener of a type. Calling the event object does the same.
  - `event_types` lists the types that have listeners.
- `astrokit.body` has `ColliderBody`, an abstract base class, and `ColliderBox`, an oriented box.
  - Bodies use Verlet integration for linear motion and a damped angular velocity.
  - Air drag is applied along the body's rotated area.
  - Bodies have `bounce` and `mult_velocity`.
  - A body can follow a parent body through `set_parent`.
  - `check_collision` returns a `CollisionData` (`mtv`, `normal`, `position`, `is_overlapping`, `other`), or `None` when the boxes are separated.
  - Collisions are found with the separating axis test.
  - Bodies raise `PositionEvent`, `RotationEvent` and `CollisionEvent` notifications through their `on_position`, `on_rotation` and `on_collision` events.
- `astrokit.system` has `PhysicsSystem`.
  - It steps every body under `gravity`, which defaults to `(0, -9.81, 0)`.
  - It resolves contacts `sim_steps` times per body, four by default.
  - It fires `CollisionEvent.OVERLAP` and `CollisionEvent.TOUCH`.
  - Bodies queued with `remove` are dropped at the end of `update`.
- `astrokit.shader` has `ShaderSource`, `ShaderType`, `ShaderError` and `shader_type_for_path`.
  - `ShaderSource` preprocesses GLSL text and keeps the result in `formatted`.
- `astrokit.textures` has the texture enums and the GL format lookups `internal_format`, `pixel_format` and `channel_count`.

## Installation

```
pip install .
```

## Physics example

```python
from astrokit.vecmath import Vec3
from astrokit.body import ColliderBox, CollisionEvent
from astrokit.system import PhysicsSystem

system = PhysicsSystem()
floor = system.spawn(ColliderBox, 1.0, Vec3(10, 1, 10))
floor.simulated = False
crate = system.spawn(ColliderBox, 1.0, Vec3(1, 1, 1), Vec3(0, 3, 0))

crate.on_collision.add_listener(CollisionEvent.OVERLAP, lambda data: print("hit", data.normal))

for _ in range(120):
    system.update(1 / 60)

print(crate.position)
```

A body that is not `simulated` still takes part in collision tests, but it is not moved.

## Shader preprocessing

`ShaderSource` reads three kinds of directive:

- `//#include FILE` inserts a file, preprocessed, resolved against the shader's own directory. If the file is missing, a warning is logged and nothing is inserted.
- `//#if NAME` … `//#endif` keeps the block only when the flag `NAME` is set to `True`. A block with no `//#endif` raises `ShaderError`.
- `//{NAME}` is a value macro.
  - When the macro has a value, the marker and the space before it are replaced by that value.
  - When the macro has no value, the marker is removed and a warning is logged.

```python
from astrokit.shader import ShaderSource, ShaderType

text = "#version 330 core\n//#if USE_FOG\nfloat fog = 1.0;\n//#endif\nvoid main() {}\n"
shader = ShaderSource(ShaderType.FRAGMENT, text)
shader.set_macro("USE_FOG", True)
print(shader.formatted)
```

Some operations raise `ShaderError`:

- `ShaderSource.from_file(path)` and `update_from_file(path)`, when the file is missing.
- `shader_type_for_path(path)`, which picks the stage from `.vert`, `.frag`, `.geom` or `.comp`, when the extension is unknown.
- `update_from_file(path)`, when the file holds a different stage.

## Texture formats

```python
from astrokit.textures import TextureUse, TextureDataType, TextureBitSize, internal_format, pixel_format

internal_format(TextureUse.COLOR, TextureDataType.FLOAT, TextureBitSize.BIT16)  # GL_RGBA16F
pixel_format(TextureUse.GRAYSCALE, TextureDataType.INT)                         # GL_RED_INTEGER
```

## What it does not do

astrokit does not render anything. It opens no window, creates no GPU objects, and does not compile shaders or upload textures.

- The shader module only produces preprocessed text.
- The texture module only gives the enum values and the format rules.
- No image, font or model files are loaded.

## Tests

```
pip install .[test]
pytest
```