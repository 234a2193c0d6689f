#!/usr/bin/env python3
"""
Explore a Siren hypermedia API from the command line.

Fetches an entity, prints its links, actions and sub-entities, then follows
one link per level to show cache hits for pre-warmed sub-entities.

Usage:
    python scripts/explore.py https://api.example.com/ --token SECRET --depth 2
"""

import argparse
import asyncio

from siren_cache import EntityStore, configure_logging
from siren_cache.entities import EmbeddedEntity, Entity


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_entity(entity: Entity) -> None:
    """Print a summary of an entity."""
    print(f"class:      [ {', '.join(entity.classes)} ]")
    print(f"title:      {entity.title}")
    print(f"self:       {entity.self_href}")
    print(f"properties: {dict(entity.to_json().get('properties', {}))}")
    print("links:")
    for link in entity.links:
        print(f"  [ {', '.join(link.rel)} ] {link.href}")
    print("actions:")
    for action in entity.actions:
        fields = ", ".join(f.name for f in action.fields)
        print(f"  {action.name}: {action.http_method} {action.href} ({fields})")
    print("entities:")
    for sub in entity.entities:
        print(f"  {sub.kind}: [ {', '.join(sub.rel)} ] {getattr(sub, 'href', None) or sub.self_href}")


async def explore(href: str, token: str | None, depth: int) -> None:
    """Walk the API starting at `href`."""
    store = EntityStore.create()
    store.subscribe("inflight", lambda e: print(f"  ⏳ in flight: {e.count}"))
    store.subscribe("update", lambda e: print(f"  ✓ cached {e.href}"))
    store.subscribe("error", lambda e: print(f"  ❌ {e.kind.value}: {e.message}"))

    try:
        for level in range(depth + 1):
            print_section(f"Level {level}: {href}")
            result = await store.get_result(href, token=token)
            if result.entity is None:
                return
            print(f"(from cache: {result.from_cache})")
            print_entity(result.entity)

            embedded = [
                e for e in result.entity.entities if isinstance(e, EmbeddedEntity) and e.self_href
            ]
            if embedded:
                href = embedded[0].self_href
                continue
            next_link = result.entity.link("next") or next(
                (l for l in result.entity.links if not l.has_rel("self")), None
            )
            if next_link is None:
                return
            href = next_link.href

        print_section("Store statistics")
        for key, value in store.stats().items():
            print(f"{key:>20}: {value}")
    finally:
        await store.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Explore a Siren hypermedia API")
    parser.add_argument("href", help="Entry point address")
    parser.add_argument("--token", help="Bearer credential", default=None)
    parser.add_argument("--depth", type=int, default=1, help="How many levels to follow")
    parser.add_argument("--log-level", default=None, help="Logging level override")
    args = parser.parse_args()

    configure_logging(args.log_level)
    asyncio.run(explore(args.href, args.token, args.depth))


if __name__ == "__main__":
    main()
