from __future__ import annotations
import argparse, logging
from .config import DEFAULT_INTERVAL, DEFAULT_PORT, LOG_FORMAT, init_cfg_from_args
from .collectors import ProcessTable, WorkerProcessRegistry, Scheduler, run_netstat
from .targets import load_targets, targets_from_names
from .tracking import DefaultTracker, IdentityResolver, Snapshot, TargetTracker, make_cycle

log = logging.getLogger("procnet_watch")

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description='Attribute TCP connections to processes and keep tracking them across restarts')
    ap.add_argument('names', nargs='*', help='process names, pids or IIS application pool names; none = every process')
    ap.add_argument('--targets', type=str, default=None, help='YAML/JSON file with targets ({name, hosting: slot|direct|auto})')
    ap.add_argument('--interval', type=float, default=DEFAULT_INTERVAL, help='seconds between two observations')
    ap.add_argument('--netstat', type=str, default=None, help='netstat executable')
    ap.add_argument('--appcmd', type=str, default=None, help='IIS appcmd.exe used to find worker processes')
    ap.add_argument('--serve', action='store_true', help='serve the latest report as JSON')
    ap.add_argument('--port', type=int, default=DEFAULT_PORT)
    ap.add_argument('-v', '--verbose', action='store_true', help='log every connection line')
    return ap.parse_args(argv)

def build(cfg, snap=None):
    processes = ProcessTable()
    lister = lambda protocol, all_states, keywords: run_netstat(protocol, all_states, keywords, netstat=cfg.netstat)
    if cfg.named_mode:
        targets = targets_from_names(cfg.names) + load_targets(cfg.targets_file)
        if not targets:
            log.warning("no usable targets given, nothing will be reported")
        resolver = IdentityResolver(processes, WorkerProcessRegistry(cfg.appcmd))
        tracker = TargetTracker(targets, resolver, processes)
    else:
        tracker = DefaultTracker(processes)
    return make_cycle(tracker, lister=lister, snap=snap)

def main(argv=None):
    args = parse_args(argv)
    try:
        cfg = init_cfg_from_args(args)
    except ValueError as e:
        raise SystemExit(f"[error] {e}")
    logging.basicConfig(level=logging.DEBUG if cfg.verbose else logging.INFO, format=LOG_FORMAT)

    snap = Snapshot()
    scheduler = Scheduler(build(cfg, snap), cfg.interval)
    print(f"[*] {'named targets' if cfg.named_mode else 'all processes'}, every {cfg.interval:g}s")
    scheduler.start()

    try:
        if cfg.serve:
            from .web import create_app
            app = create_app(cfg, snap)
            print(f"[*] Serving on http://localhost:{cfg.port}")
            app.run(host='127.0.0.1', port=cfg.port, debug=False, use_reloader=False)
        else:
            print("[*] Press Ctrl+C to quit...")
            while scheduler.is_alive():
                scheduler.join(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        scheduler.stop()
        scheduler.join(5.0)

if __name__ == '__main__':
    main()
