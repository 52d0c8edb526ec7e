"""Management command to generate fake developer events (and bookings) for local development."""
# ruff: noqa: S311

import random
from datetime import timedelta
from typing import Any

from django.core.management.base import BaseCommand, CommandParser
from django.utils import timezone
from faker import Faker

from bookings.services import create_booking
from events.exceptions import DevEventError
from events.models import Event
from events.services import create_event


TAG_POOL = [
    "python",
    "django",
    "javascript",
    "react",
    "nextjs",
    "cloud",
    "devops",
    "kubernetes",
    "ai",
    "machine-learning",
    "data",
    "security",
    "open-source",
    "web3",
    "mobile",
]

EVENT_KINDS = ["Conf", "Summit", "Meetup", "Hackathon", "Workshop", "Days"]

AGENDA_TEMPLATES = [
    "Doors open and registration",
    "Opening keynote",
    "Talk: {topic}",
    "Panel: the future of {topic}",
    "Hands-on workshop: {topic}",
    "Lunch and networking",
    "Lightning talks",
    "Closing remarks",
]


class Command(BaseCommand):
    """Generate fake developer events."""

    help = "Generate sample developer events for testing purposes"

    def add_arguments(self, parser: CommandParser) -> None:
        """
        Add command line arguments.

        Args:
            parser: Command line argument parser for adding custom arguments

        """
        parser.add_argument(
            "--count",
            type=int,
            default=20,
            help="Number of events to generate (default: 20)",
        )
        parser.add_argument(
            "--bookings",
            type=int,
            default=0,
            help="Maximum number of bookings to generate per event (default: 0)",
        )
        parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Seed for reproducible data",
        )

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: ARG002
        """Create the events through the event service so slugs and schedules are normalized."""
        fake = Faker()
        if options["seed"] is not None:
            fake.seed_instance(options["seed"])
            random.seed(options["seed"])

        event_count = int(options["count"])
        max_bookings = int(options["bookings"])

        self.stdout.write(f"Generating {event_count} events...")
        created = 0
        for _ in range(event_count):
            try:
                event = create_event(self._event_fields(fake))
            except DevEventError as e:
                self.stderr.write(self.style.WARNING(f"Skipped event: {e}"))
                continue
            created += 1
            booked = self._book(event, fake, random.randint(0, max_bookings))
            self.stdout.write(f"  {event.slug} ({booked} bookings)")

        self.stdout.write(self.style.SUCCESS(f"Successfully generated {created} events"))

    def _event_fields(self, fake: Faker) -> dict[str, Any]:
        """Return the raw fields of one event, in the loose notations organizers type."""
        topic = random.choice(TAG_POOL)
        start = timezone.now() + timedelta(days=random.randint(1, 365))
        hour = random.randint(1, 12)
        minute = random.choice([0, 15, 30, 45])

        return {
            "title": f"{fake.city()} {topic.replace('-', ' ').title()} {random.choice(EVENT_KINDS)}",
            "description": fake.sentence(nb_words=12),
            "overview": "\n\n".join(fake.paragraphs(nb=2)),
            "image": f"https://picsum.photos/seed/{fake.uuid4()}/800/450",
            "venue": f"{fake.company()} Hall",
            "location": f"{fake.city()}, {fake.country()}",
            "date": start.strftime(random.choice(["%Y-%m-%d", "%B %d, %Y", "%d %b %Y"])),
            "time": f"{hour}:{minute:02d} {random.choice(['AM', 'PM'])}",
            "mode": random.choice(Event.Mode.values),
            "audience": random.choice(["Developers", "Students", "Data scientists", "Everyone"]),
            "agenda": [
                item.format(topic=topic) for item in random.sample(AGENDA_TEMPLATES, k=4)
            ],
            "organizer": fake.company(),
            "tags": [topic, *random.sample(TAG_POOL, k=2)],
        }

    def _book(self, event: Event, fake: Faker, count: int) -> int:
        """Book ``count`` unique fake addresses onto ``event`` and return how many succeeded."""
        booked = 0
        for _ in range(count):
            try:
                create_booking(event.pk, fake.unique.email())
            except DevEventError as e:
                self.stderr.write(self.style.WARNING(f"Skipped booking: {e}"))
                continue
            booked += 1
        return booked
