from django.core.management.base import BaseCommand

from inquiries.services.expiry import expire_stale_items


class Command(BaseCommand):
    help = "Mark open inquiries past their validity date and submitted quotations past valid_until as expired."

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Only report what would expire")

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        result = expire_stale_items(dry_run=dry_run)

        verb = "Would expire" if dry_run else "Expired"
        self.stdout.write(self.style.SUCCESS(
            f"{verb} {result.expired_inquiries} inquiries and {result.expired_quotations} quotations."
        ))
