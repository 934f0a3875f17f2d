from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.models import Category, Product
from apps.catalog.repositories import ProductImageRepository

CATEGORIES = [
    "Black tea",
    "Green tea",
    "White tea",
    "Oolong tea",
    "Herbal tea",
]

# name, effect, caffeine level, type, category
PRODUCTS = [
    ("Assam", "Energizing", "High caffeine", "Loose leaf", "Black tea"),
    ("Earl Grey", "Uplifting", "High caffeine", "Loose leaf", "Black tea"),
    ("English Breakfast", "Energizing", "High caffeine", "Tea bag", "Black tea"),
    ("Sencha", "Refreshing", "Medium caffeine", "Loose leaf", "Green tea"),
    ("Matcha", "Focus", "High caffeine", "Powder", "Green tea"),
    ("Gunpowder", "Refreshing", "Medium caffeine", "Loose leaf", "Green tea"),
    ("Silver Needle", "Calming", "Low caffeine", "Loose leaf", "White tea"),
    ("Tie Guan Yin", "Balancing", "Medium caffeine", "Loose leaf", "Oolong tea"),
    ("Chamomile", "Relaxing", "Caffeine free", "Tea bag", "Herbal tea"),
    ("Peppermint", "Soothing", "Caffeine free", "Loose leaf", "Herbal tea"),
]


class Command(BaseCommand):
    help = "Seed the tea catalog with sample categories and products."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing catalog data before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing catalog...")
            ProductImageRepository().clear()
            Product.objects.all().delete()
            Category.objects.all().delete()

        self.stdout.write("Seeding categories...")
        name_to_cat = {}
        for name in CATEGORIES:
            cat, _ = Category.objects.get_or_create(name=name)
            name_to_cat[name] = cat

        self.stdout.write("Seeding products...")
        created = 0
        for name, effect, caffeine, kind, category_name in PRODUCTS:
            _, was_created = Product.objects.get_or_create(
                name=name,
                category=name_to_cat[category_name],
                defaults=dict(effect=effect, caffeine_level=caffeine, type=kind),
            )
            created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Catalog seeded: {len(name_to_cat)} categories, {created} new products"
            )
        )
