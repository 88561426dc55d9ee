# hipoio

Tools for working with HIPO data records in Python.

- `hipoio.recordbuilder.RecordBuilder` collects event buffers and builds an
  LZ4-compressed record with the 56-byte record header.
- `hipoio.record.Record` reads a record back from a binary stream,
  decompresses it and gives access to the events inside.
  `hipoio.record.parse_record_header` and `hipoio.record.decompress` can be
  used on their own; `HipoWrongFile` and `HipoRecordError` are the errors
  raised by the module.
- `hipoio.dataframe.DataFrame` packs uncompressed events one after another
  behind a record header.
- `hipoio.particle.Particle` holds a reconstructed particle and computes
  momentum, angles and vertex quantities.
- `hipoio.chart.Asciichart` draws line charts for the terminal, styled with
  the helpers in `hipoio.ansi` (`Color`, `Color256`, `RGB`, `Decoration`,
  `Foreground`, `Background`, `Style`, `Text`).
- `hipoio.utils` has string helpers (`tokenize`, `find_position`,
  `substring`, `ltrim`, `rtrim`, `trim`), little-endian buffer writers
  (`write_int`, `write_long`, `write_byte`) and a `Benchmark` timer.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Building and reading a record

```python
import io

from hipoio.recordbuilder import RecordBuilder
from hipoio.record import Record

builder = RecordBuilder()
builder.user_word_one = 7
builder.add_event(b"first event payload")
builder.add_event(b"second event")
builder.build()

print(builder.entries(), builder.record_size(), builder.built_user_word_one())

data = builder.record_bytes()
record = Record()
record.read_record(io.BytesIO(data), 0, 0, len(data))

print(record.event_count())        # 2
print(record.event_bytes(1))       # b'second event'
print(record.events_map())         # start and end offset of every event
```

`RecordBuilder.add_event(data, start=0, length=None)` returns `False` when
the builder has no room left for the event (limits are set with the
`max_events` and `max_length` constructor arguments). `reset()` drops the
collected events.

`Record.read_record(stream, position, data_offset=0, input_size=None)`
returns `False` when the record does not fit inside the input, and issues a
`RuntimeWarning` when the record is incomplete.
`Record.read_record_block(stream, position, record_length)` reads a record
whose header and payload are read together in one block. Records written in
swapped byte order are recognised from their magic word.
`Record.get_data(index)` returns an `EventData` with the event bytes, their
offset in the decompressed record and their size. The record keeps
`Benchmark` timers in `read_benchmark`, `unzip_benchmark` and
`index_benchmark`.

## Data frames

```python
from hipoio.dataframe import DataFrame

frame = DataFrame(max_events=50, max_size=512 * 1024)
frame.add_event(event_bytes)       # False when the frame is full
print(frame.count(), frame.size())
frame.summary()
```

Events are expected to carry their own length in bytes 4 to 8, as HIPO
events do; `event_at(pos)` and iteration over the frame rely on it.
`buffer()` returns the frame bytes, and `init(buffer)` loads a frame from
them.

## Particle kinematics

```python
from hipoio.particle import Particle

electron = Particle(
    pdg=11, status=2100, index=0, charge=-1, mass=0.000511,
    px=0.3, py=0.1, pz=2.0, energy=2.02,
    vx=0.0, vy=0.0, vz=-3.0, vt=0.0, beta=1.0, chi2pid=0.5,
)
print(electron.p(), electron.pt(), electron.theta(), electron.phi())
print(electron.four_momentum(), electron.vertex())
```

`phi()` and `theta()` are in degrees; `angle_to(other)` is the opening angle
in radians.

## Terminal charts

```python
from hipoio.chart import Asciichart

print(Asciichart([1, 3, 2, 5, 4]).height(5).plot())
print(Asciichart({"a": [1, 2, 3], "b": [3, 2, 1]}).show_legend(True).plot())
```

The output contains ANSI colour escape sequences. Only `ChartType.LINE`
charts are drawn; `ChartType.CIRCLE` gives an empty string.

## Timing

```python
from hipoio.utils import Benchmark

bench = Benchmark("decode")
with bench:
    ...
bench.show()
```

## What this package does not do

It works on single records and frames. It has no reader or writer for whole
HIPO files (file header, record index, schema dictionary), does not decode
banks or structures inside events, fills no histograms and has no
command-line program.