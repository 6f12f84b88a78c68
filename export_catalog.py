"""
Semester Export Script

Fetches every course of one semester from the Course Explorer and writes
two JSON files:
    {year}_{semester}.json          full course records
    {year}_{semester}_summary.json  year/semester/department/number/title

Usage:
    python export_catalog.py 2020 fall
    python export_catalog.py 2020 fall --departments CS MATH --sections
"""

import argparse
import logging
from datetime import datetime
from pathlib import Path

from cisapi.api import CatalogExporter
from cisapi.config import get_app_config
from cisapi.services import CatalogService, HttpTransport

parser = argparse.ArgumentParser(description="Export one semester of the Course Explorer to JSON")
parser.add_argument("year", type=int)
parser.add_argument("semester")
parser.add_argument("--departments", nargs="*", default=None, help="Subject codes (default: all)")
parser.add_argument("--sections", action="store_true", help="Inline each course's sections")
parser.add_argument("--output-dir", default="data", type=Path)
args = parser.parse_args()

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

print("=" * 80)
print(f"SEMESTER EXPORT: {args.semester.capitalize()} {args.year}")
print("=" * 80)

# === Step 1: Load Configuration ===
print("\n[Step 1] Loading configuration...")
config = get_app_config()
print(f"  ✓ Config loaded")
print(f"    - Base URL: {config.base_url}")
print(f"    - Timeout: {config.request_timeout}s")
print(f"    - Workers: {config.max_workers}")

# === Step 2: Collect Courses ===
print("\n[Step 2] Collecting courses...")
if args.departments:
    print(f"  Departments: {', '.join(args.departments)}")
else:
    print(f"  Departments: all subjects of the semester")
print()

start_time = datetime.now()

with HttpTransport() as transport:
    exporter = CatalogExporter(CatalogService(transport=transport))
    courses = exporter.collect_courses(args.year, args.semester, departments=args.departments)
    print(f"  ✓ Collected {len(courses)} courses")

    # === Step 3: Write Files ===
    print("\n[Step 3] Writing JSON files...")
    stem = f"{args.year}_{args.semester.lower()}"
    full_path = exporter.export_courses(
        courses, args.output_dir / f"{stem}.json", include_sections=args.sections
    )
    print(f"  ✓ {full_path}")
    summary_path = exporter.export_courses(
        courses, args.output_dir / f"{stem}_summary.json", summary=True
    )
    print(f"  ✓ {summary_path}")

elapsed = (datetime.now() - start_time).total_seconds()

# === Step 4: Display Results ===
print("\n" + "=" * 80)
print("EXPORT COMPLETE")
print("=" * 80)
print()
print(f"⏱️  Total Time: {elapsed:.1f} seconds ({elapsed/60:.1f} minutes)")
print(f"📊 Courses: {len(courses)}")
print()
print("=" * 80)
