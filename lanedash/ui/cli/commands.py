from __future__ import annotations

from lanedash.config.loader import load_settings
from lanedash.core.doctor import run_doctor
from lanedash.core.results import load_summary
from lanedash.simulation.runner import run_simulations


def cmd_serve(args):
    import uvicorn

    settings = load_settings(
        seed=args.seed,
        results_dir=args.results_dir,
        host=args.host,
        port=args.port,
        snapshot_fps=args.fps,
    )
    from web import server

    server.configure(settings)
    uvicorn.run(server.app, host=settings.host, port=settings.port)


def cmd_simulate(args):
    settings = load_settings(
        seed=args.seed,
        results_dir=args.results_dir,
        sims_per_run=args.runs,
        duration_ms=args.duration_ms,
        sim_workers=args.workers,
    )
    summary = run_simulations(settings)
    m = summary.metrics
    print("\n" + "=" * 60)
    print("  LANEDASH — SIMULATION RESULTS")
    print("=" * 60)
    print(f"Runs:             {m['n_runs']}")
    print(f"Avg lane changes: {m['avg_lane_changes']:.2f} (std {m['std_lane_changes']:.2f})")
    print(f"Avg spawned:      {m['avg_spawned']:.1f}")
    print(f"Avg peak traffic: {m['avg_max_obstacles']:.1f}")
    print(f"Saved: {summary.path}")


def cmd_report(args):
    settings = load_settings(seed=args.seed, results_dir=args.results_dir)
    path = settings.paths.results_json
    if not path.exists():
        print(f"[report] Missing results: {path}")
        return
    data = load_summary(path)
    print(f"\nSUMMARY ({path})")
    for key in ("n_runs", "duration_ms", "avg_score", "avg_lane_changes", "std_lane_changes",
                "min_lane_changes", "max_lane_changes", "avg_spawned", "avg_max_obstacles", "final_speed"):
        if key in data:
            print(f"  {key}: {data[key]}")


def cmd_doctor(args):
    settings = load_settings(seed=args.seed, results_dir=args.results_dir)
    checks = run_doctor(settings)
    ok_count = 0
    for chk in checks:
        mark = "OK" if chk.ok else "FAIL"
        print(f"[{mark}] {chk.name}: {chk.detail}")
        ok_count += int(chk.ok)
    print(f"\n{ok_count}/{len(checks)} checks passing")
