# cpframe

Building blocks for a game framework, each usable on its own:

- `cpframe.debug`: a thread-safe `Logger` with levels (`LogLevel`), ANSI
  colours, optional auto-flush and optional output to a file; module-level
  helpers `log_info`, `log_success`, `log_warn`, `log_error`, `log_debug` and
  `log_throw` (which logs an error and raises `RuntimeError`); and `ScopedLog`,
  a context manager that logs on entry and logs the elapsed milliseconds on
  exit.
- `cpframe.diagnostics`: frame timing and FPS metrics (`FrameCounter`,
  `FrameData`, `FpsInfo`, `TimeInfo`), named timers with running statistics
  (`DiagnosticsManager`, `TimerSampler`) and a microsecond
  `HighResolutionTimer`. Each accepts an optional clock function returning
  microseconds, which makes them easy to drive in tests.
- `cpframe.algorithm`: incremental `MD5`, hex encoding and decoding
  (`to_hex_string`, `from_hex_string`, `from_hex_string_prefixed`) and Base64
  (`base64_encode`, `base64_decode`, `base64_encode_url_safe`,
  `base64_decode_url_safe`). The decoders return empty bytes for invalid input.
- `cpframe.compression`: zlib compression with an 8-byte little-endian header
  holding the original size (`compress_data`, `uncompress_data`). Bad input to
  `uncompress_data`, or a declared size above `max_allowed_size` (4 GiB by
  default), raises `CompressionError`.
- `cpframe.filesystem`: path normalisation, a process-wide game directory
  (`set_game_path`, `get_game_path`), `read_bytes`, `read_bytes_auto` (memory
  maps files over 1 MiB), `write_bytes` (creates parent directories),
  `file_exists`, `delete_file_safe` and a read-only memory-mapped `MMapFile`.
- `cpframe.security`: AES-128-CBC with PKCS#7 padding (`encrypt_cbc`,
  `decrypt_cbc`) and `generate_random_key_and_iv`, all around a `SecurityData`
  key/IV pair. `decrypt_cbc` raises `ValueError` on a bad size or padding.
- `cpframe.serializable`: `SerializableBase`, whose registered attributes
  serialize to plain dicts and to BSON and can be read back.
- `cpframe.mathutil`: float32 NumPy vector and matrix helpers (`normalize`,
  `length`, `dot`, `cross`, `translate`, `rotate`, `scale`, `ortho`,
  `perspective`, `look_at`, `inverse`, `transpose`, `reflect`, `identity`,
  `identity3`, `distance`, `to_radians`, `to_degrees`).
- `cpframe.input`: keyboard, mouse and gamepad state tracking
  (`InputManager`, `KeyState`, `GamepadState`) with named action bindings and
  callbacks, reading raw device state from an `InputBackend` you supply.

## Installation

```
pip install .
```

## Examples

```python
from cpframe.algorithm import MD5, base64_encode, base64_decode
from cpframe.compression import compress_data, uncompress_data
from cpframe.security import encrypt_cbc, decrypt_cbc, generate_random_key_and_iv

print(MD5.compute(b"abc").hexdigest())   # 900150983cd24fb0d6963f7d28e17f72
assert base64_decode(base64_encode(b"hello")) == b"hello"

packed = compress_data(b"payload" * 100, 6)
assert uncompress_data(packed) == b"payload" * 100

keys = generate_random_key_and_iv()
assert decrypt_cbc(encrypt_cbc(b"secret data", keys), keys) == b"secret data"
```

```python
from cpframe.serializable import SerializableBase

class Player(SerializableBase):
    def __init__(self):
        super().__init__()
        self.name = "hero"
        self.level = 1
        self.register_field("name", "name")
        self.register_field("level", "level")

p = Player()
blob = p.serialize_bson()
q = Player()
q.deserialize_bson(blob)
assert q.serialize() == {"name": "hero", "level": 1}
```

```python
from cpframe.debug import Logger, LogLevel, ScopedLog

logger = Logger(minimum_level=LogLevel.WARN)
logger.set_color_enabled(False)
logger.log(LogLevel.WARN, "{} frames dropped", 3)

with ScopedLog("LOADER", "Loading level", "Level loaded", logger=logger):
    pass
```

## What the package does not do

There is no window, renderer or main game loop here, and no built-in device
backend: `InputManager` only tracks what an `InputBackend` subclass reports,
so connecting it to a real keyboard, mouse or gamepad is up to you.

## Running the tests

```
pip install .[test]
pytest
```