"""
Medusa에 Art & See 상품을 시딩한다.
카테고리마다 상품 1개, 상품마다 변형 216개 (무드 4 × 스타일 6 × 사이즈 9).

사용법:
    cd src && python -m scripts.seed_medusa_products [--dry-run] [--delete-existing]

필요한 환경 변수: MEDUSA_BACKEND_URL, MEDUSA_ADMIN_EMAIL, MEDUSA_ADMIN_PASSWORD

이미 있는 상품은 변형 제목을 비교해 빠진 변형만 추가한다 (중단 후 재실행 가능).
"""

import argparse
import sys

from client.medusa import MedusaAdminClient
from core.config import settings
from core.exceptions import UpstreamError
from service.catalog import (
    CATEGORIES,
    CATEGORY_LABELS,
    COLLECTION_HANDLE,
    build_variants_for_category,
    product_handle,
    product_image_urls,
    product_option_values,
    variant_image_urls,
)
from utility.logger import setup_logger
from utility.timer import timer


def product_payload(category: str, collection_id: str | None) -> dict:
    label = CATEGORY_LABELS.get(category, category)
    images = product_image_urls(settings.GALLERY_BASE_URL, category)
    return {
        "title": f"{label} Portrait Art",
        "handle": product_handle(category),
        "description": (
            f"Transform your {label.lower()} photos into stunning artwork. "
            "Choose your style and delivery type."
        ),
        "status": "published",
        "collection_id": collection_id,
        "thumbnail": images[0],
        "images": [{"url": url} for url in images],
        "options": product_option_values(),
    }


def variant_payload(category: str, variant) -> dict:
    return {
        "title": variant.title,
        "prices": [{"amount": variant.amount, "currency_code": "usd"}],
        "options": variant.options,
        "manage_inventory": False,
        "allow_backorder": False,
        "metadata": {
            "images": list(variant_image_urls(
                settings.GALLERY_BASE_URL, category, variant.style, variant.mood
            )),
        },
    }


def ensure_collection(client: MedusaAdminClient, dry_run: bool) -> str | None:
    collection_id = client.find_collection_id(COLLECTION_HANDLE)
    if collection_id:
        print(f"Collection '{COLLECTION_HANDLE}' exists: {collection_id}")
        return collection_id
    if dry_run:
        print(f"[dry-run] would create collection '{COLLECTION_HANDLE}'")
        return None
    collection_id = client.create_collection("Art Transform", COLLECTION_HANDLE)
    print(f"Created collection: {collection_id}")
    return collection_id


def seed_category(
    client: MedusaAdminClient,
    category: str,
    collection_id: str | None,
    dry_run: bool,
    delete_existing: bool,
) -> int:
    """카테고리 상품 하나를 시딩하고 새로 만든 변형 수를 반환한다."""
    handle = product_handle(category)
    variants = build_variants_for_category(category)
    existing = client.find_product(handle)

    if existing and delete_existing:
        if dry_run:
            print(f"[dry-run] would delete {handle} ({existing['id']})")
        else:
            client.delete_product(existing["id"])
            print(f"Deleted {handle}")
        existing = None

    if existing:
        product_id = existing["id"]
        done_titles = {v.get("title") for v in existing.get("variants") or []}
        print(f"Product exists: {handle} ({len(done_titles)}/{len(variants)} variants)")
    elif dry_run:
        print(f"[dry-run] would create {handle} with {len(variants)} variants")
        return len(variants)
    else:
        product_id = client.create_product(product_payload(category, collection_id))
        done_titles = set()
        print(f"Created product: {handle} ({product_id})")

    pending = [v for v in variants if v.title not in done_titles]
    if dry_run:
        print(f"[dry-run] would add {len(pending)} variants to {handle}")
        return len(pending)

    for n, variant in enumerate(pending, start=1):
        client.create_variant(product_id, variant_payload(category, variant))
        if n % 24 == 0 or n == len(pending):
            print(f"  {handle}: {n}/{len(pending)}")
    return len(pending)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed Art & See products into Medusa")
    parser.add_argument("--dry-run", action="store_true", help="print what would change")
    parser.add_argument("--delete-existing", action="store_true", help="recreate products from scratch")
    args = parser.parse_args(argv)

    setup_logger("INFO")

    if not (settings.MEDUSA_BACKEND_URL and settings.MEDUSA_ADMIN_EMAIL and settings.MEDUSA_ADMIN_PASSWORD):
        print("Set MEDUSA_BACKEND_URL, MEDUSA_ADMIN_EMAIL, MEDUSA_ADMIN_PASSWORD in .env")
        return 1

    client = MedusaAdminClient(settings.MEDUSA_BACKEND_URL, timeout=settings.MEDUSA_TIMEOUT_SECONDS)

    try:
        print("Logging in to Medusa...")
        client.login(settings.MEDUSA_ADMIN_EMAIL, settings.MEDUSA_ADMIN_PASSWORD)
        collection_id = ensure_collection(client, args.dry_run)

        total = 0
        with timer("seed medusa products") as t:
            for category in CATEGORIES:
                total += seed_category(
                    client, category, collection_id, args.dry_run, args.delete_existing
                )
    except UpstreamError as e:
        print(f"FAILED: {e.message}")
        return 1

    print("-" * 50)
    print(f"Done. {total} variants {'planned' if args.dry_run else 'created'} in {t.elapsed:.1f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
