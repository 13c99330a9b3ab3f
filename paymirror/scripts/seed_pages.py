"""
Seed Pages Script
This script populates rback_pages from the page catalog and makes sure the
admin role exists. Safe to re-run: pages whose name or url is already present are skipped.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from paymirror.config.pages_config import PAGE_CATALOG
from paymirror.config.settings import settings
from paymirror.database.supabase_client import SupabaseClient
from paymirror.modules.rbac.schemas import PageCreate
from paymirror.modules.rbac.service import PageService, PAGES_TABLE
from supabase import Client
from typing import Dict, List
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_pages(supabase: Client, catalog: List[Dict[str, str]] = PAGE_CATALOG) -> int:
    """Insert catalog pages whose name and url are both unregistered"""
    logger.info("Seeding pages...")

    existing = supabase.table(PAGES_TABLE).select("pagename, pageurl").execute()
    taken_names = {p["pagename"] for p in existing.data or []}
    taken_urls = {p["pageurl"] for p in existing.data or []}

    new_pages = []
    skipped = 0
    for page in catalog:
        if page["pagename"] in taken_names or page["pageurl"] in taken_urls:
            if page["pagename"] not in taken_names:
                logger.warning(f"Skipping page '{page['pagename']}': url {page['pageurl']} is already registered")
            skipped += 1
            continue
        taken_names.add(page["pagename"])
        taken_urls.add(page["pageurl"])
        new_pages.append(PageCreate(**page))

    if not new_pages:
        logger.info("Pages already seeded")
        return 0

    created = PageService(supabase).create_page(new_pages)
    logger.info(f"Pages seeded: {len(created)} created, {skipped} skipped")
    return len(created)


def seed_admin_role(supabase: Client) -> int:
    """Create the admin role if it is missing; returns its id"""
    existing = supabase.table("roles")\
        .select("id")\
        .eq("name", settings.admin_role_name)\
        .limit(1)\
        .execute()
    if existing.data:
        return existing.data[0]["id"]

    result = supabase.table("roles").insert({"name": settings.admin_role_name}).execute()
    logger.info(f"Created role: {settings.admin_role_name}")
    return result.data[0]["id"]


def main():
    """Main function to seed pages and the admin role"""
    try:
        supabase = SupabaseClient.get_service_client()

        logger.info("Starting page seeding...")
        admin_role_id = seed_admin_role(supabase)
        page_count = seed_pages(supabase)

        logger.info("Seeding completed successfully!")
        logger.info(f"Total: {page_count} pages created, admin role id {admin_role_id}")

    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
