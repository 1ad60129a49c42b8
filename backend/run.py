"""
Start the HR Desk Core API with uvicorn.

Usage:
    python run.py                 # 127.0.0.1:8000
    python run.py --reload        # auto-reload while developing
    python run.py --seed-roles    # create missing default roles first
"""
import argparse
import uvicorn


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the HR Desk Core API server")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes (default: 1, forced to 1 with --reload)"
    )
    parser.add_argument(
        "--seed-roles",
        action="store_true",
        help="Insert the default custom roles that do not exist yet, then start"
    )
    return parser.parse_args()


def main():
    args = parse_args()
    workers = 1 if args.reload else args.workers

    if args.seed_roles:
        from scripts.seed_roles import seed_roles
        print("Seeding default roles...")
        seed_roles()

    print(f"HR Desk Core on http://{args.host}:{args.port} (workers={workers}, reload={args.reload})")
    uvicorn.run(
        "hrdesk.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=workers,
    )


if __name__ == "__main__":
    main()
