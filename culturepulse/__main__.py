"""CLI entry point: python -m culturepulse."""

import argparse
import json
import sys
import time

from .config import PORT
from .log import log, set_verbose


def _make_client(args):
    from .client import DirectClient, ProxyClient

    backend = getattr(args, "backend", None)
    return ProxyClient(backend) if backend else DirectClient()


def _print_trends(trends: list[dict]):
    for i, t in enumerate(trends, 1):
        print(f"  {i:2d}. [{t.get('platform', '?')}] {(t.get('title') or '')[:90]}")
        print(f"      {t.get('category')} | velocity {t.get('velocityScore') or 0} | confidence {t.get('confidence') or 0:.0f}")


def cmd_serve(args):
    import uvicorn

    log(f"CulturePulse server on http://{args.host}:{args.port}")
    uvicorn.run("culturepulse.server:app", host=args.host, port=args.port, reload=args.reload)


def cmd_collect(args):
    from .collector import DataCollector

    collector = DataCollector(_make_client(args))
    trends = [t.to_dict() for t in collector.collect_business_trends(limit=args.limit)]

    if args.json:
        print(json.dumps(trends, indent=2))
        return trends
    if not trends:
        print("  No trends collected from any source.")
        return trends

    print(f"\n  Top trends ({len(trends)}):\n")
    _print_trends(trends)

    if args.save:
        from .store import DashboardStore

        store = DashboardStore()
        added = sum(store.save_trend(t) for t in trends)
        print(f"\n  Saved {added} new trends.")
    return trends


def cmd_watch(args):
    from .agent import RealtimeAgent

    agent = RealtimeAgent(_make_client(args), interval=args.interval)

    def show(trends, stats):
        print(f"\n  {stats['last_update']}: {len(trends)} trends")
        _print_trends([t.to_dict() for t in trends[:args.limit]])

    agent.subscribe(show)
    agent.start()
    try:
        while agent.is_running:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        agent.stop(timeout=5)


def cmd_report(args):
    from .reports import generate_report
    from .store import DashboardStore

    store = DashboardStore()
    trends = store.saved_trends()
    if not trends:
        print("  No saved trends. Run `collect --save` first.")
        sys.exit(1)

    report = generate_report(trends, period=args.period, count=args.count)
    store.add_report(report)
    print(f"\n  {report['title']}\n  {report['summary']}")
    print(f"  Top trend: {report['topTrend']}")
    return report


def cmd_saved(args):
    from .reports import calculate_stats, filter_trends
    from .store import DashboardStore

    store = DashboardStore()
    if args.remove:
        if store.remove_trend(args.remove):
            print(f"  Removed {args.remove}")
        else:
            print(f"  No saved trend with id {args.remove}")
        return

    trends = filter_trends(
        store.saved_trends(),
        category=args.category,
        search=args.search,
        phase=args.phase,
    )
    stats = calculate_stats(trends)
    print(
        f"\n  {stats['totalTrends']} trends | {stats['emerging72h']} emerging | "
        f"accuracy {stats['accuracy']}% | {stats['dataPoints']} data points\n"
    )
    _print_trends(trends)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="CulturePulse: marketing trend proxy and aggregator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd")

    # serve
    p_serve = sub.add_parser("serve", help="Run the proxy API server")
    p_serve.add_argument("--host", default="0.0.0.0")
    p_serve.add_argument("--port", type=int, default=PORT)
    p_serve.add_argument("--reload", action="store_true")

    # collect
    p_collect = sub.add_parser("collect", help="Collect, merge and rank trends once")
    p_collect.add_argument("--backend", default=None, help="Proxy server URL (default: call APIs directly)")
    p_collect.add_argument("--limit", type=int, default=15)
    p_collect.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    p_collect.add_argument("--save", action="store_true", help="Add results to saved trends")

    # watch
    p_watch = sub.add_parser("watch", help="Run the realtime agent until Ctrl-C")
    p_watch.add_argument("--backend", default=None)
    p_watch.add_argument("--interval", type=float, default=60.0)
    p_watch.add_argument("--limit", type=int, default=10, help="Trends to print per cycle")

    # report
    p_report = sub.add_parser("report", help="Generate a report from saved trends")
    p_report.add_argument("--period", default="month", choices=["week", "month", "quarter", "year"])
    p_report.add_argument("--count", default="all", help="'all' or number of top trends")

    # saved
    p_saved = sub.add_parser("saved", help="List or remove saved trends")
    p_saved.add_argument("--category", default="all")
    p_saved.add_argument("--phase", default="all")
    p_saved.add_argument("--search", default="")
    p_saved.add_argument("--remove", default=None, metavar="TREND_ID")

    args = parser.parse_args(argv)

    if args.verbose:
        set_verbose(True)

    if not args.cmd:
        parser.print_help()
        return

    if args.cmd == "report" and args.count != "all" and not args.count.isdigit():
        parser.error("--count must be 'all' or a number")

    if args.cmd == "serve":
        cmd_serve(args)
    elif args.cmd == "collect":
        cmd_collect(args)
    elif args.cmd == "watch":
        cmd_watch(args)
    elif args.cmd == "report":
        cmd_report(args)
    elif args.cmd == "saved":
        cmd_saved(args)


if __name__ == "__main__":
    main()
