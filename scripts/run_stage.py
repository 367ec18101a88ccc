#!/usr/bin/env python3
"""
Script to run one pipeline stage against a running service and print its events.
Usage: python scripts/run_stage.py --title "Recipe Sharing App" --deliverable research \
           [--agent product_researcher] [--url http://localhost:8080]
"""
import sys
import uuid
import asyncio
import argparse
from pathlib import Path

import httpx

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.sse import aiter_sse
from app.schemas.events import parse_event


async def run_stage(base_url: str, body: dict) -> int:
    """Stream a stage execution; returns a process exit code."""
    url = f"{base_url.rstrip('/')}/api/tasks/execute"
    exit_code = 1
    # No read timeout: the service keeps the stream open while generating
    async with httpx.AsyncClient(timeout=httpx.Timeout(10.0, read=None)) as client:
        async with client.stream("POST", url, json=body, headers={"Accept": "text/event-stream"}) as response:
            if response.is_error:
                await response.aread()
                print(f"ERROR: {response.status_code} {response.text}")
                return 1
            async for record in aiter_sse(response.aiter_lines()):
                event = parse_event(record.data)
                if event.type == "progress":
                    print(f"[{event.percent:3d}%] {event.step}")
                elif event.type == "deliverable":
                    url_preview = event.url if len(event.url) < 120 else event.url[:117] + "..."
                    print(f"DELIVERABLE {event.key}: {url_preview}")
                elif event.type == "complete":
                    print("COMPLETE")
                    exit_code = 0
                else:
                    print(f"{event.type.upper()}: {event.content}")
    return exit_code


def main() -> int:
    parser = argparse.ArgumentParser(description="Execute a pipeline stage and print progress events")
    parser.add_argument("--url", default="http://localhost:8080", help="Service base URL")
    parser.add_argument("--title", required=True, help="Project title")
    parser.add_argument("--project-id", default=None, help="Project id (random if omitted)")
    parser.add_argument("--stage-index", type=int, default=1)
    parser.add_argument("--stage-name", default="2. Research")
    parser.add_argument("--stage-description", default="Research the market and validate the idea")
    parser.add_argument("--agent", default="product_researcher", help="Agent id")
    parser.add_argument("--deliverable", default=None, help="Deliverable key, e.g. research or codebase")
    args = parser.parse_args()

    body = {
        "taskId": f"task_{uuid.uuid4().hex[:12]}",
        "projectId": args.project_id or str(uuid.uuid4()),
        "projectTitle": args.title,
        "stageIndex": args.stage_index,
        "stageName": args.stage_name,
        "stageDescription": args.stage_description,
        "agentId": args.agent,
    }
    if args.deliverable:
        body["deliverableKey"] = args.deliverable

    print(f"Executing {args.stage_name} for {args.title!r} via {args.url}")
    return asyncio.run(run_stage(args.url, body))


if __name__ == "__main__":
    sys.exit(main())
