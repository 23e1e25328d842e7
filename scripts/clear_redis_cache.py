#!/usr/bin/env python3
"""
Redis Cache Clearer
Safely clears cached grant search results from Redis.

Only keys under the grant cache prefix are touched; anything else stored in
the same Redis database is left alone.

How to use: python scripts/clear_redis_cache.py [--force | KEY ...]
"""

import os
import sys
from typing import List

# Add project root to Python path so we can import core modules
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from core.redis.grant_cache_manager import GrantCacheManager  # noqa: E402
from core.redis.redis_manager import RedisManager  # noqa: E402


def clear_grant_cache(confirm: bool = False) -> None:
    """
    Clear all cached grant searches.

    Args:
        confirm: If True, skip confirmation prompt
    """
    print("🗑️  Grant Cache Clearer")
    print("=" * 30)

    redis_manager = RedisManager()

    if not redis_manager.is_healthy():
        print("❌ Redis is not healthy or not accessible")
        print("Make sure Redis is running and REDIS_URL is set")
        return

    print("✅ Redis connection successful")
    print()

    cache_manager = GrantCacheManager(redis_manager=redis_manager)
    cached_keys = cache_manager.list_cached_keys()

    if not cached_keys:
        print("📭 No cached grant searches found")
        return

    print(f"📋 Found {len(cached_keys)} cached grant searches:")
    for key in cached_keys:
        print(f"   • {key}")

    print()

    if not confirm:
        response = input("⚠️  Are you sure you want to clear ALL cached grant searches? (yes/no): ").lower().strip()
        if response not in ["yes", "y"]:
            print("❌ Cache clearing cancelled")
            return

    print("🗑️  Clearing cache entries...")
    deleted_count = cache_manager.clear_cache()
    print(f"✅ Successfully cleared {deleted_count} cache entries")

    remaining = cache_manager.list_cached_keys()
    if remaining:
        print(f"⚠️  Warning: {len(remaining)} keys still remain")


def clear_specific_keys(keys: List[str]) -> None:
    """
    Clear specific cache keys.

    Args:
        keys: List of keys to clear
    """
    print("🎯 Selective Cache Clearer")
    print("=" * 30)

    redis_manager = RedisManager()

    if not redis_manager.is_healthy():
        print("❌ Redis is not healthy or not accessible")
        return

    deleted_count = sum(1 for key in keys if redis_manager.delete(key))
    print(f"✅ Successfully cleared {deleted_count} of {len(keys)} keys")


def main() -> None:
    """Main function."""
    if len(sys.argv) > 1:
        if sys.argv[1] == "--force":
            clear_grant_cache(confirm=True)
        elif sys.argv[1] == "--help":
            print("Usage:")
            print("  python clear_redis_cache.py           # Clear all with confirmation")
            print("  python clear_redis_cache.py --force   # Clear all without confirmation")
            print("  python clear_redis_cache.py KEY ...   # Clear specific keys")
        else:
            clear_specific_keys(sys.argv[1:])
    else:
        clear_grant_cache()


if __name__ == "__main__":
    main()
