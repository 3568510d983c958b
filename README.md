# stocknest

Plan how to cut a list of pieces from stock of a fixed length while using as
few sticks as possible. Each cut uses its own length plus the blade's kerf.
The package lists every combination of pieces that fits on one stick. It then
solves a mixed-integer program with SciPy's `milp` to choose how many sticks to
cut to each pattern.

## Installing

```
pip install .
```

## Lengths

Lengths are in inches. They can be written in the usual shop forms:

| Input        | Inches  |
|--------------|---------|
| `24'`        | 288     |
| `8'4"`       | 100     |
| `7' 6 1/2"`  | 90.5    |
| `110 1/8`    | 110.125 |
| `110.125`    | 110.125 |

```python
from stocknest.parse import parse_advanced_length, parse_fraction, pretty_len

parse_advanced_length("8'4\"")   # 100.0
parse_fraction("3/16")           # 0.1875
pretty_len(100.5)                # 8' 4 1/2"
```

`parse_fraction` and `parse_advanced_length` return `0.0` for input they
cannot read. They do not raise. `pretty_len` rounds to the nearest 1/32 inch.
`stocknest.output.to_fraction` renders a value as a simplified fraction with a
denominator of up to 32, for example `to_fraction(0.125)` gives `"1/8"`. It
falls back to three decimal places when no such fraction is close enough.

## Optimizing in Python

The value types `Cut`, `Stick`, `Solution` and `Pattern` live in
`stocknest.models`.

```python
from stocknest.models import Cut
from stocknest.algorithm import optimize_cutting, OptimizationError
from stocknest.output import group_patterns

cuts = [Cut(30.0, 1), Cut(30.0, 2), Cut(60.0, 3)]
try:
    solution = optimize_cutting(cuts, stock_len=96.0, kerf=0.125)
except OptimizationError as exc:
    print("no plan:", exc)
else:
    print(solution.num_sticks, "sticks,", solution.total_waste, "in. waste")
    for pattern in group_patterns(solution.sticks):
        print(pattern.count, "x", [cut.length for cut in pattern.cuts])
```

`optimize_cutting` raises `OptimizationError` in two cases: no pattern fits on
a stick, or the solver finds no optimal plan.

Lengths are scaled by 1024 and handled as integers while patterns are
enumerated. `generate_patterns(available_cuts, stock_len, kerf)` works on these
scaled integers directly. It returns every fitting combination as a sorted
tuple, without duplicates.

`group_patterns` merges sticks that carry the same cut lengths. Patterns are
ordered by count, most frequent first, then by used length, longest first.

## Running the server

```
stocknest-server
```

The server listens on `0.0.0.0:8080` by default. Use `--host` and `--port` to
change this. Log lines go to standard output.

The server offers these routes:

- `GET /` – the page in `static/index.html`
- `GET /static/<file>` – other files under `static/`
- `GET /api/health` – returns `{"status":"ok"}`
- `POST /api/optimize` (and `OPTIONS` for CORS) – runs an optimization

Static files are looked up under the current directory first, then under
`/app`. `stocknest.server.create_app()` returns the Flask application if you
want to serve it another way.

A request to `/api/optimize` looks like this:

```json
{
  "jobName": "Shelving",
  "materialType": "2x4",
  "stockLength": "8'",
  "kerf": "1/8",
  "cuts": [
    {"length": "30", "quantity": 4},
    {"length": "2' 6 1/2\"", "quantity": 2}
  ]
}
```

`jobName` and `materialType` are optional. `stockLength` and `kerf` must be
strings. If the kerf does not parse to a positive value, 1/8" is used. Cuts
with a non-positive length or quantity are skipped.

The response contains:

- the job name and material type
- the stock length and kerf, both as numbers and in readable form
- the grouped cutting patterns, with the number of sticks, total waste and
  material efficiency
- a summary of the requested cuts, longest first
- the optimization time in seconds

Errors are answered with a JSON `error` message:

| Status | When |
|--------|------|
| 400 | malformed JSON, an invalid stock length, a cut longer than the stock, or no valid cuts |
| 500 | no solution could be found, or required fields are missing or of the wrong type |

Unknown paths get a JSON 404.

The web page itself, `static/index.html`, is not part of this package. Without
it, `GET /` answers with a 404 page, but the API works.

## Tests

```
pip install .[test]
pytest
```