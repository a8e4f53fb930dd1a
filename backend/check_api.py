"""
Quick live API check against the real upstreams.
Run with: python check_api.py
"""

import asyncio
import os
import sys
from datetime import datetime

# Set working directory
backend_dir = os.path.dirname(os.path.abspath(__file__))
os.chdir(backend_dir)
sys.path.insert(0, backend_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(backend_dir, ".env"))


async def check_api():
    """Hit every upstream once through the dashboard service."""
    print("\n" + "=" * 60)
    print("BTC DASHBOARD - LIVE API CHECK")
    print("=" * 60)

    from btc_dashboard.services.dashboard import DashboardService
    from btc_dashboard.services.http import close_upstream_client

    service = DashboardService()

    try:
        # Test 1: Price
        print("\n[1] Bitcoin Price...")
        print("-" * 40)
        price = await service.get_price()
        print(f"Price: ${price.price:,.2f}")
        print(f"24h Change: {price.price_change_percentage_24h:+.2f}%")
        print(f"Market Cap: ${price.market_cap / 1e9:,.2f}B")

        # Test 2: Fear & Greed
        print("\n[2] Fear & Greed Index...")
        print("-" * 40)
        fg = await service.get_sentiment()
        print(f"Current: {fg.current.value} ({fg.current.value_classification})")
        print(f"History: {len(fg.history)} days")
        print(f"Averages: 7d={fg.avg_7d:.1f} 30d={fg.avg_30d:.1f} 90d={fg.avg_90d:.1f}")

        # Test 3: Network
        print("\n[3] Network Stats...")
        print("-" * 40)
        network = await service.get_network_stats()
        print(f"Block Height: {network.block_height:,}")
        print(f"Hash Rate: {network.hash_rate:.2f} EH/s")
        print(f"Blocks to Halving: {network.blocks_until_halving:,}")
        print(f"Est. Halving: {network.estimated_halving_date:%Y-%m-%d}")

        # Test 4: News (may legitimately be empty)
        print("\n[4] News...")
        print("-" * 40)
        news = await service.get_news(3)
        if news:
            for i, item in enumerate(news, 1):
                print(f"{i}. {item.title[:60]}...")
        else:
            print("News feed returned empty")

        # Test 5: History
        print("\n[5] Price History (7d)...")
        print("-" * 40)
        history = await service.get_history(7)
        print(f"Points: {len(history)}")
        if history:
            first, last = history[0], history[-1]
            print(f"First: ${first.price:,.2f} @ {datetime.fromtimestamp(first.timestamp / 1000):%Y-%m-%d}")
            print(f"Last: ${last.price:,.2f} @ {datetime.fromtimestamp(last.timestamp / 1000):%Y-%m-%d}")

        # Test 6: Composite, served from cache for everything above
        print("\n[6] Dashboard Composite...")
        print("-" * 40)
        composite = await service.get_dashboard_composite()
        print(f"Windows: {', '.join(composite.price_history)}")
        print(f"Warnings: {composite.warnings}")
        print(f"Cache: {service.cache.stats()['fresh']}")

    finally:
        await close_upstream_client()

    print("\n" + "=" * 60)
    print("LIVE API CHECK COMPLETE")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(check_api())
