"""Watchlist client - track Trendyol products and their price history."""

import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

from configs import settings
from src.models.watchlist_models import TrackedItem
from src.services.watchlist.client import WatchlistError
from src.services.watchlist.service import WatchlistService, create_watchlist_service

logging.basicConfig(
    level=settings.LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s"
)

HISTORY_PREVIEW = 5


def format_date(value: datetime) -> str:
    """Render a timestamp as dd.mm.yyyy HH:MM in local time."""
    return value.astimezone().strftime("%d.%m.%Y %H:%M")


def render_item(item: TrackedItem) -> List[str]:
    """Return the lines describing one tracked item."""
    product = item.product
    stock = "Stokta" if product.in_stock else "Tükendi"
    bell = "açık" if item.notifications else "kapalı"

    price_line = f"    {product.price}"
    if product.original_price:
        price_line += f" (önce {product.original_price})"
    if product.discount_label:
        price_line += f" {product.discount_label}"

    lines = [
        f"[{item.id}] {product.name}",
        price_line,
        f"    {stock} | Satıcı: {product.seller} | Bildirim: {bell}",
    ]
    if product.rating:
        reviews = f" ({product.review_count} değerlendirme)" if product.review_count else ""
        lines.append(f"    Puan: {product.rating}{reviews}")
    lines.append(f"    {product.url}")
    lines.append(
        f"    Eklendi: {format_date(item.added_at)} | "
        f"Son kontrol: {format_date(product.observed_at)}"
    )
    if len(item.price_history) > 1:
        lines.append("    Fiyat geçmişi:")
        for entry in item.price_history[-HISTORY_PREVIEW:]:
            lines.append(f"      {format_date(entry.date)}  {entry.price}")
    return lines


def render_watchlist(service: WatchlistService) -> str:
    if not service.items:
        return "Takip listesi boş."

    summary = service.summary()
    lines = [
        f"Toplam: {summary.total} | Stokta: {summary.in_stock} | "
        f"Tükendi: {summary.out_of_stock}",
        "",
    ]
    for item in service.items:
        lines.extend(render_item(item))
        lines.append("")
    return "\n".join(lines).rstrip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="Show tracked products.")
    add = commands.add_parser("add", help="Start tracking a product URL.")
    add.add_argument("url")
    refresh = commands.add_parser("refresh", help="Re-check one product.")
    refresh.add_argument("item_id")
    commands.add_parser("refresh-all", help="Re-check every product, one at a time.")
    remove = commands.add_parser("remove", help="Stop tracking a product.")
    remove.add_argument("item_id")
    toggle = commands.add_parser("toggle", help="Toggle notifications for a product.")
    toggle.add_argument("item_id")
    return parser


def main(argv: Optional[List[str]] = None, service: Optional[WatchlistService] = None) -> int:
    """Run one CLI command; returns the process exit code."""
    args = build_parser().parse_args(argv)
    service = service or create_watchlist_service()

    try:
        if args.command == "add":
            item = service.add(args.url)
            print("\n".join(render_item(item)))
        elif args.command == "refresh":
            item = service.refresh(args.item_id)
            if item is None:
                print(f"Ürün bulunamadı: {args.item_id}", file=sys.stderr)
                return 1
            print("\n".join(render_item(item)))
        elif args.command == "refresh-all":
            service.refresh_all()
            print(render_watchlist(service))
        elif args.command == "remove":
            if not service.remove(args.item_id):
                print(f"Ürün bulunamadı: {args.item_id}", file=sys.stderr)
                return 1
            print("Ürün takip listesinden çıkarıldı.")
        elif args.command == "toggle":
            item = service.toggle_notifications(args.item_id)
            state = "açıldı" if item.notifications else "kapatıldı"
            print(f"Bildirimler {state}: {item.product.name}")
        else:
            print(render_watchlist(service))
    except WatchlistError as e:
        print(e.message, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
