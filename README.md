# lsdjkit

A library for working with song data from Little Sound Dj, the Game Boy music
tracker. It works on raw bytes in memory: it packs and unpacks songs with the
block compression LSDj uses for stored songs, and reads and edits instrument
parameters bit by bit.

## Installing

    pip install lsdjkit

To run the tests:

    pip install "lsdjkit[test]"
    pytest

## Modules

- `lsdjkit.compression`
  - `compress(data, block_offset, default_wave, default_instrument)` turns a
    song of exactly `SONG_BYTE_COUNT` (0x8000) bytes into `BLOCK_SIZE` (0x200)
    byte blocks, padded with zeros to a block boundary. Block jumps are
    numbered from `block_offset`. It raises `LsdjError` with kind
    `WRITE_FAILED` when the song does not fit in `BLOCK_COUNT` (191) blocks,
    and `ValueError` for a song of the wrong size or empty default patterns.
  - `decompress(rstream, first_block_position, follow_block_jumps,
    default_wave, default_instrument)` reads a compressed song from a binary
    stream and returns its bytes. With `follow_block_jumps` each jump is
    followed relative to `first_block_position`; otherwise blocks are read
    in order. A result that is not 0x8000 bytes raises `LsdjError` with kind
    `DECOMPRESSION_INCORRECT_SIZE`.
  - `decompress_block(...)` decompresses one block and returns the next
    block index; `decompress_step(...)` decompresses one step and returns a
    block index or `None`.
  - The default wave and default instrument byte patterns are passed in by
    the caller.
- `lsdjkit.instrument`
  - `Instrument(params=None, format_version=0, name="")` holds 16 parameter
    bytes and a five-character name. `get_field(byte, position, count)` and
    `set_field(byte, position, count, value)` read and write any bit field.
    Properties cover the shared settings: `type`, `envelope`, the ADSR
    levels and speeds, `panning`, `transpose`, `table_enabled`, `table`,
    `table_mode`, `vibrato_direction`, `command_rate`, `vibrato_shape` and
    `plv_speed`.
  - `set_vibrato_shape_and_plv_speed(shape, speed)` stores both at once;
    before format version 4 unsupported combinations raise `ValueError`.
  - Enums: `Panning`, `TableMode`, `VibratoShape`, `PlvSpeed`.
- `lsdjkit.channels` — `PulseInstrument`, `NoiseInstrument`,
  `WaveInstrument` and `KitInstrument`, subclasses of `Instrument` with the
  properties of each channel type, and the `KitLoopMode` enum. Fields whose
  layout changed between format versions follow the instrument's
  `format_version`.
- `lsdjkit.bits` — `create_mask`, `copy_bits`, `get_bits`, and name
  sanitising with `is_valid_name_char`, `sanitize_name_char` and
  `sanitize_name`. LSDj names only use `0-9`, `A-Z`, `x` and space;
  lower-case letters are made upper case, other characters raise
  `ValueError`.
- `lsdjkit.naming` — `construct_project_name(name, underscore=False)` cuts a
  raw name (text or bytes) to eight characters or its first NUL and can
  replace `x` by `_`; `compare_case_insensitive(first, second)`;
  `is_hidden_file(name)`.
- `lsdjkit.streams` — `read_bytes`, `read_byte`, `write_bytes`,
  `write_byte` and `write_repeat`: checked reads and writes on binary
  streams that raise `LsdjError` on short reads and writes.
- `lsdjkit.errors` — `LsdjError`, whose `kind` is an `ErrorKind`, and
  `error_description(kind)`.

## Example

    import io
    from lsdjkit.compression import compress, decompress

    song = bytes(range(256)) * 128           # 0x8000 bytes
    wave = bytes([0x8E, 0xCD, 0xCC, 0xBB] * 4)
    instrument = bytes([0xA8] + [0] * 15)

    packed = compress(song, 1, wave, instrument)
    unpacked = decompress(io.BytesIO(packed), 0, True, wave, instrument)
    assert unpacked == song

    from lsdjkit.channels import WaveInstrument

    inst = WaveInstrument(format_version=16, name="bass")
    inst.synth = 3
    assert inst.synth == 3 and inst.name == "BASS"

## What it does not do

The package has no reader or writer for whole `.sav` or `.lsdsng` files, no
song structure beyond instrument parameters (no chains, phrases, tables or
grooves), and no command-line tools. It compresses and decompresses song
bytes and edits instrument bytes; finding and storing those bytes in a file
is left to the caller.