"""Basic usage examples for the session-data client."""

import asyncio

from f1sessions import F1SessionsClient, SessionLabel


async def main() -> None:
    async with F1SessionsClient() as f1:
        weekend = await f1.fetch_all_sessions(2025, 6)

        kind = "Sprint" if weekend.is_sprint_weekend else "Conventional"
        print(f"=== 2025 Round 6 ({kind} weekend) ===")
        for result in weekend.results():
            status = f"{len(result.rows)} classified" if result.rows else "not available"
            print(f"  {result.label.value}: {status}")

        if weekend.race:
            print("\n=== Race top 3 ===")
            for row in weekend.race[:3]:
                print(f"  P{row.position} {row.driver} ({row.constructor}) {row.gap}")

        fp1 = weekend.get(SessionLabel.FP1)
        if fp1.rows:
            print("\n=== FP1 personal bests ===")
            for row in fp1.rows[:5]:
                print(f"  P{row.position} {row.driver} {row.time} {row.gap}")

        standings = await f1.fetch_driver_standings(2025)
        if standings:
            print("\n=== Driver standings ===")
            for row in standings[:5]:
                print(f"  {row.position}. {row.driver} - {row.points:g} pts")


if __name__ == "__main__":
    asyncio.run(main())
