# /scripts/search_check.py
from __future__ import annotations
import argparse, sys, time, os, json

import requests

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from clients.search_client import ProteinSearchClient  # noqa: E402

def print_step(title):
    print(f"\n=== {title} ===")

def fmt(v, nd=1):
    return "-" if v is None else f"{v:.{nd}f}"

def format_rows(results):
    lines = []
    for i, it in enumerate(results, 1):
        lines.append(
            f"{i:2d}. {it.get('brand') or '-'} | {it.get('product') or '-'} [{it.get('type') or '?'}]"
            f"  €/kg={fmt(it.get('pricePerKg'))} prot/100g={fmt(it.get('proteinPer100g'))}"
            f"  origin={it.get('origin') or '-'} src={it.get('source') or '-'}"
        )
    return lines

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Smoke-check the /search endpoint")
    ap.add_argument("--base", default=os.getenv("SEARCH_BASE_URL", "http://localhost:8000"))
    ap.add_argument("-q", "--query", default="")
    ap.add_argument("--type", default=None)
    ap.add_argument("--sort", choices=["price", "protein", "calories"], default=None)
    ap.add_argument("--external", action="store_true")
    ap.add_argument("--limit", type=int, default=None)
    ap.add_argument("--json", action="store_true", help="dump raw JSON instead of a table")
    args = ap.parse_args(argv)

    cli = ProteinSearchClient(args.base)
    print_step(f"SEARCH {args.base}/search q={args.query!r}")
    t0 = time.perf_counter()
    try:
        data = cli.search(args.query, type=args.type, sort=args.sort, external=args.external, limit=args.limit)
    except requests.RequestException as e:
        print(f"request failed: {e}")
        return 1
    dt = (time.perf_counter() - t0) * 1000
    results = data.get("results", [])
    print(f"{len(results)} results in {dt:.0f} ms")
    if args.json:
        print(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        for line in format_rows(results):
            print(line)
    return 0

if __name__ == "__main__":
    sys.exit(main())
