import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from rest_framework.authtoken.models import Token

from billing.services.quota_guard import get_organization_subscription
from organizations.models import Membership, Organization


class Command(BaseCommand):
    help = "Seed demo shipper and forwarder organizations, each with an admin user and API token"

    def add_arguments(self, parser):
        parser.add_argument("--password", default=os.getenv("DEV_SEED_PASS", "ChangeMe123!"))

    def handle(self, *args, **options):
        demo_orgs = [
            {"name": "Demo Shipper GmbH", "type": Organization.TYPE_SHIPPER, "email": "ops@demo-shipper.test", "username": "demo_shipper"},
            {"name": "Demo Air Forwarding", "type": Organization.TYPE_FORWARDER, "email": "quotes@demo-air.test", "username": "demo_air"},
            {"name": "Demo Ocean Lines", "type": Organization.TYPE_FORWARDER, "email": "sales@demo-ocean.test", "username": "demo_ocean"},
        ]
        User = get_user_model()

        created = 0
        for data in demo_orgs:
            username = data.pop("username")
            org, was_created = Organization.objects.get_or_create(name=data["name"], defaults=data)
            if was_created:
                created += 1
                self.stdout.write(self.style.SUCCESS(f"Created organization: {org.name}"))
            else:
                self.stdout.write(self.style.NOTICE(f"Exists: {org.name}"))

            get_organization_subscription(org.id)

            user, user_created = User.objects.get_or_create(username=username, defaults={"email": data["email"]})
            if user_created:
                user.set_password(options["password"])
                user.save()
            Membership.objects.get_or_create(user=user, defaults={"organization": org, "role": "owner"})
            token, _ = Token.objects.get_or_create(user=user)
            self.stdout.write(f"  {username} TOKEN: {token.key}")

        self.stdout.write(self.style.SUCCESS(f"Organizations ready (created {created})."))
