# gridstar/cli.py
from __future__ import annotations
import argparse, csv, logging, os, os.path, time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .astar import AStarEngine
from .config import GENERATION_OPTIONS, Settings, add_settings_arguments
from .generator import generate_obstacles
from .grid import Grid
from .reachability import shortest_path_length
from .viz import draw_search_png

@dataclass
class SolveStats:
    succeeded: bool
    iterations: int
    path_len: int
    cost: Optional[int]
    open_left: int
    closed: int
    elapsed_sec: float

def format_stats(name: str, s: SolveStats) -> str:
    cost = "-" if s.cost is None else str(s.cost)
    return (f"{name:20s} | reached={s.succeeded!s:5s} | iters={s.iterations:6d} | "
            f"path={s.path_len:5d} | cost={cost:>5s} | open={s.open_left:5d} | "
            f"closed={s.closed:6d} | time={s.elapsed_sec*1000:7.1f} ms")

def solve(grid: Grid, mask: bytes, trace: bool = False) -> Tuple[AStarEngine, SolveStats]:
    eng = AStarEngine(grid.width, grid.height, mask)
    t0 = time.perf_counter()
    while not eng.finished:
        res = eng.step()
        if trace:
            scores = eng.current_scores()
            fgh = "" if scores is None else " f=%g g=%g h=%g" % (scores[2], scores[0], scores[1])
            print(f"iter={res.iterations:6d} status={res.status.value:9s} current={res.current}{fgh} "
                  f"opened={list(res.opened)} improved={list(res.improved)}")
    elapsed = time.perf_counter() - t0
    cost = len(eng.path) - 1 if eng.succeeded else None
    stats = SolveStats(eng.succeeded, eng.iterations, len(eng.path), cost,
                       len(eng.open_cells), sum(eng.closed_mask), elapsed)
    return eng, stats

# -------- subcommands --------

def cmd_gen(args: argparse.Namespace) -> int:
    settings = Settings.from_args(args)
    grid = Grid(settings.width, settings.height)
    os.makedirs(args.out, exist_ok=True)
    for i in range(args.count):
        gen = generate_obstacles(grid.width, grid.height, settings.density,
                                 f"{settings.seed}-{i}", settings.guarantee_solvable)
        path = os.path.join(args.out, f"grid_{i:03d}.txt")
        grid.save(path, gen.mask)
        print(f"wrote {path} (seed={gen.seed!r}, attempts={gen.attempts})")
    return 0

def cmd_solve(args: argparse.Namespace) -> int:
    if args.env:
        given = [name for name in GENERATION_OPTIONS if hasattr(args, name)]
        if given:
            flags = ", ".join("--" + name.replace("_", "-") for name in given)
            raise ValueError(f"--env cannot be combined with {flags}")
        grid, mask = Grid.load(args.env)
        name = os.path.splitext(os.path.basename(args.env))[0]
    else:
        settings = Settings.from_args(args)
        grid = Grid(settings.width, settings.height)
        gen = generate_obstacles(grid.width, grid.height, settings.density,
                                 settings.seed, settings.guarantee_solvable)
        mask = gen.mask
        name = gen.seed
        if gen.attempts > 1:
            print(f"layout found after {gen.attempts} attempts (seed={gen.seed!r})")

    eng, stats = solve(grid, bytes(mask), trace=args.trace)
    print(format_stats(name, stats))

    if args.png:
        draw_search_png(eng.snapshot(), args.png, cell=args.cell)
        print("wrote", args.png)

    if args.verify:
        expected = shortest_path_length(grid.width, grid.height, mask)
        found = stats.path_len if stats.succeeded else None
        if expected != found:
            print(f"verify FAILED: bfs={expected} astar={found}")
            return 1
        print(f"verify ok: bfs={expected}")
    return 0

def cmd_bench(args: argparse.Namespace) -> int:
    envs = sorted(p for p in os.listdir(args.envdir) if p.endswith(".txt"))
    if args.out:
        os.makedirs(args.out, exist_ok=True)
    rows = []
    for fname in envs:
        grid, mask = Grid.load(os.path.join(args.envdir, fname))
        eng, st = solve(grid, bytes(mask))
        print(format_stats(fname, st))
        if args.out:
            draw_search_png(eng.snapshot(), os.path.join(args.out, os.path.splitext(fname)[0] + ".png"))
        rows.append({
            "env": fname,
            "width": grid.width,
            "height": grid.height,
            "reached": st.succeeded,
            "iterations": st.iterations,
            "path_len": st.path_len,
            "closed": st.closed,
            "time_sec": round(st.elapsed_sec, 6),
        })
    if args.csv and rows:
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
        print("wrote CSV:", args.csv)
    return 0

def selftest_cases() -> List[Tuple[str, Grid, bytearray]]:
    cases = []
    g = Grid(5, 5)
    cases.append(("empty", g, g.empty_mask()))

    detour = g.empty_mask()
    for x, y in [(2, 1), (2, 2), (2, 3), (1, 2), (3, 2)]:
        detour[g.index(x, y)] = 1
    cases.append(("detour", g, detour))

    serpentine = g.empty_mask()
    for y in range(4):
        serpentine[g.index(1, y)] = 1
        serpentine[g.index(3, y + 1)] = 1
    cases.append(("serpentine", g, serpentine))

    wall = g.empty_mask()
    for x in range(g.width):
        wall[g.index(x, 1)] = 1
    cases.append(("solid_wall", g, wall))
    return cases

def cmd_selftest(args: argparse.Namespace) -> int:
    failures = 0
    for name, grid, mask in selftest_cases():
        eng, st = solve(grid, bytes(mask))
        straight = grid.width + grid.height - 1
        if name == "empty":
            ok = st.succeeded and st.path_len == straight
        elif name == "solid_wall":
            ok = eng.finished and not st.succeeded
        else:
            ok = st.succeeded and st.path_len == shortest_path_length(grid.width, grid.height, mask)
        print(f"{name:12s} {'ok' if ok else 'FAILED'}  {format_stats(name, st)}")
        failures += not ok
    return 1 if failures else 0

def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Stepped A* search on seeded obstacle grids")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("gen", help="generate obstacle grids")
    add_settings_arguments(g)
    g.add_argument("--count", type=int, default=10)
    g.add_argument("--out", type=str, default="envs")
    g.set_defaults(func=cmd_gen)

    s = sub.add_parser("solve", help="run one search to completion")
    add_settings_arguments(s, suppress_defaults=True)
    s.add_argument("--env", type=str, default=None, help="grid file; excludes the generation options")
    s.add_argument("--png", type=str, default="", help="write the final search state as PNG")
    s.add_argument("--cell", type=int, default=10, help="PNG cell size in pixels")
    s.add_argument("--verify", action="store_true", help="check path length against BFS")
    s.add_argument("--trace", action="store_true", help="print every step")
    s.set_defaults(func=cmd_solve)

    b = sub.add_parser("bench", help="solve every .txt grid in a folder")
    b.add_argument("--envdir", type=str, required=True)
    b.add_argument("--out", type=str, default="", help="folder for PNG snapshots")
    b.add_argument("--csv", type=str, default="")
    b.set_defaults(func=cmd_bench)

    t = sub.add_parser("selftest", help="run the built-in sanity scenarios")
    t.set_defaults(func=cmd_selftest)

    return p

def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except ValueError as e:
        ap.error(str(e))

if __name__ == "__main__":
    raise SystemExit(main())
