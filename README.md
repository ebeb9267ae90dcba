# flowgen

Small, dependency-free building blocks for 2D games.

## Modules

- `flowgen.geometry`: immutable value types `Vec2`, `Rect`, `RGBA`, `NRGBA`, `TilePosition` and `TileRect`. `TileRect` can be moved, re-centred and tested for overlap.
- `flowgen.collision`: `CollisionLayer` bitmasks, `ColliderCache` (tracks this frame's, last frame's and newly started collisions), `CircleCollider` with `bounds`, `contains` and `overlaps`, and a `SpatialHash` that buckets ids by grid cell.
- `flowgen.rand`: `Range` (random values in a range; integer ranges give integers), `get_list`, `seeded_list`, `random_position_in_rect`, and weighted `Table`s of `Item`s with `get` and `get_unique`.
- `flowgen.path`: `path` scatters points around the segment between two points and returns them sorted by distance from the start.
- `flowgen.dag`: the `RoomDag` room graph (leaf nodes, distances, breadth-first ordering, random picks), `RoomPlacement`, the grid-walk generators `generate_random_grid_walk_dag2` and `generate_random_grid_walk_dag_no_overlap`, `blank_walk_dag`, `add_walk` and `calculate_room_depths`.
- `flowgen.forces`: force-directed relaxation (`wiggle`, `untangle`, `ForceBasedRelaxer`, `psld_step`, `psld`) and edge/rectangle intersection tests such as `has_edge_intersections`, `has_rect_intersections` and `find_node_neighbor_average_position`.
- `flowgen.layout`: `axis_aligned`, `GridLayout`, `DepthFirstLayout`, `BreadthFirstLayout`, `place_depth_first` and `place_breadth_first`.
- `flowgen.anim`: `Frame` and `Animation`, frame timing with looping, fixed-duration playback (`set_animation_with_duration`) and alignment to a global clock (`update_global_animation_timer`).

## Install

```
pip install .
```

## Example: weighted loot table

```python
from flowgen.rand import Table, new_item

loot = Table(new_item(80, "copper"), new_item(15, "silver"), new_item(5, "gold"))
drop = loot.get()
two_different = loot.get_unique(2)
```

## Example: a small dungeon graph

```python
import random
from flowgen.dag import generate_random_grid_walk_dag2

rng = random.Random(99)
dag, room_pos = generate_random_grid_walk_dag2(rng, 20, 3)
print(dag.topological_sort("0_0"))
print(dag.get_leaf_nodes())
```

## Example: animation timing

```python
from datetime import timedelta
from flowgen.anim import Animation, Frame

walk = [Frame(dur=timedelta(milliseconds=100)), Frame(dur=timedelta(milliseconds=100))]
anim = Animation("walk", {"walk": walk})
anim.update(timedelta(milliseconds=150))  # True: moved on to the second frame
```

## What it does not do

flowgen draws nothing and opens no window. A `Frame` holds whatever sprite object you give it and only asks it for `bounds()`; rendering, input and audio are left to your engine. There are no easing curves, particle systems or terrain noise here either.

## Tests

```
pip install .[test]
pytest
```