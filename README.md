# arcgrid

Primitives for small colour grids of the kind found in abstract-reasoning
puzzles: images with a position, a size and cells holding colours 0–9,
where 0 is background. Pure Python, no dependencies.

## Install

    pip install .

For the test suite:

    pip install ".[test]"
    pytest

## Modules

- `arcgrid.image` — `Point` (an `x, y` pair supporting `+`, `-` and
  multiplication by an integer) and `Image` (a dataclass with `x`, `y`, `w`,
  `h` and a row-major `mask`). Cells are read and written as
  `img[row, col]`; `safe(row, col)` returns 0 outside the grid; `copy()` and
  `area()` do what they say; `p` and `sz` give position and size as points.
  `bad_image()` returns the empty image used to signal that an operation
  has no result. The module also defines the limits `MAXSIDE`, `MAXAREA`
  and `MAXPIXELS`.
- `arcgrid.core` — `col_mask`, `count`, `count_cols`, `count_components`
  (8-connected), `majority_col`, `is_rectangle`, `sub_image`,
  `split_cols` (binary images paired with their colour), and the
  constructors `full(sz, filling=1, p=Point(0, 0))` and `empty(sz, p)`.
- `arcgrid.transforms` — single-image and pairwise operations: `col`,
  `pos`, `square`, `line`, `get_pos`, `get_size`, `get_size0`, `get_w`,
  `get_h`, `hull`, `hull0`, `to_origin`, `move`, `filter_col`,
  `filter_palette`, `broadcast`, `col_shape`, `col_shape_image`,
  `compress`, `embed`, `compose` (modes 0–4) and `compose_with`,
  `outer_product_is`, `outer_product_si`, `fill`, `interior`, `interior2`,
  `border`, `align`, `align_x`, `align_y`, `align_match`, `replace_cols`,
  `center`, `transform`, `rigid` (ids 0–8), `mirror_heuristic`, `invert`,
  `count`, `my_stack`, `wrap`, `smear`, `extend`.
- `arcgrid.selection` — cutting an image into pieces (`cut`,
  `heuristic_cut`, `get_regular`, `cut_index`), scoring and choosing among
  pieces (`max_criterion` with 14 criteria, `pick_max`, `pick_max_by`,
  `pick_maxes`, `pick_not_maxes`, and the combined `cut_pick_max`,
  `cut_pick_maxes`, `regular_cut_pick_max`, `split_pick_max`,
  `split_pick_maxes`, `cut_compose`, `regular_cut_compose`,
  `split_compose`), `split_cols`, `compose_all`, tiling with `repeat` and
  `mirror`, and `maj_col`.
- `arcgrid.deduce` — `inverse_outer_product_is` and
  `inverse_outer_product_si` split an image into a layout image and a tile;
  `OuterProductDeduction(train)` finds the simplest such factorisation shared
  by all training outputs (exposed as `train_targets` and `rec_funci`) and
  `reconstruct(a, b)` rebuilds an image from its factors. It raises
  `ValueError` when no factorisation reproduces the outputs.
- `arcgrid.sizes` — `solve_single` and `solve_size` pick the most plausible
  output size from candidate size sequences; `cheat_size` lists the
  training output sizes followed by a known test output size.
- `arcgrid.tiny` — `TinyHashMap`, which keeps the first value stored under
  each key, and `TinyChildren`, a table from function index to child node
  that answers `TinyChildren.NONE` for functions not yet applied.
- `arcgrid.measures` — `rc_diff`, `orient_input`, `hull_each`,
  `count_each`.

## Example

```python
from arcgrid import core
from arcgrid.image import Point
from arcgrid.transforms import compress, rigid

img = core.full(Point(3, 2), 5)
img[0, 0] = 0
print(core.count(img))          # 5
print(rigid(compress(img), 1))  # rotated counter-clockwise
```

## What it does not do

This is a library of building blocks only. It has no command-line program,
does not read or write puzzle files, and does not search over compositions
of operations to solve a puzzle; `solve_size` expects the candidate size
sequences to be supplied by the caller.