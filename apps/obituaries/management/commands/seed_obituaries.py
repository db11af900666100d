import uuid

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.identity.models import Profile
from apps.obituaries.models import Obituary

SEED_FOUNDER_EMAIL = 'founder@killedit.com'
SEED_FOUNDER_HANDLE = 'gravekeeper'

FAKE_OBITUARIES = [
    {
        'title': "RIP SnackSendr",
        'blurb': "A snack delivery app that died from founder burnout and bad UI. Gone too soon.",
        'causes': ["founder-burnout", "bad-ui", "market-saturation"],
        'story_md': (
            "## The Rise and Fall of SnackSendr\n\n"
            "We thought we could disrupt the snack delivery space. We were wrong.\n\n"
            "### What went wrong:\n"
            "- Founder worked 80-hour weeks for 8 months straight\n"
            "- UI looked like it was designed in 2005\n"
            "- Turns out people just go to the store for snacks\n\n"
            "### Lessons learned:\n"
            "- Sleep is not optional\n- Hire a designer\n- Validate your market first"
        ),
        'upvotes': 42,
        'roast_score': 15,
    },
    {
        'title': "RIP PetTech AI",
        'blurb': "AI-powered pet care that couldn't even take care of itself. Lasted 3 months.",
        'causes': ["over-engineering", "no-market-need", "ai-hype"],
        'story_md': (
            "## The AI Pet Care Revolution That Wasn't\n\n"
            "We built an AI that could predict when your pet needed food, water, exercise, and love. "
            "Unfortunately, we couldn't predict when our startup would need funding.\n\n"
            "### The business was not:\n"
            "- $50/month for a pet app? Really?\n"
            "- Pet owners just... look at their pets\n"
            "- We spent 90% of time on tech, 10% on customers"
        ),
        'upvotes': 67,
        'roast_score': 23,
    },
    {
        'title': "RIP CryptoLaundry",
        'blurb': "Blockchain-based laundry service. The only thing that got washed was our money.",
        'causes': ["crypto-winter", "regulatory-issues", "terrible-idea"],
        'story_md': (
            "## LaundryCoins: The Future of Clean Clothes\n\n"
            "We tokenized laundry. Yes, really. Each wash cycle was an NFT.\n\n"
            "### Reality check:\n"
            "- Gas fees cost more than actual laundry\n"
            "- Nobody wanted crypto laundry\n"
            "- We got rugged by our own washing machines"
        ),
        'upvotes': 134,
        'roast_score': 89,
    },
    {
        'title': "RIP FoodieAI",
        'blurb': "AI food recommendation app that recommended dog food to humans. Ruff ending.",
        'causes': ["bad-ai", "data-poisoning", "no-testing"],
        'story_md': (
            "## When AI Goes Wrong: A Culinary Catastrophe\n\n"
            "Our AI was supposed to recommend the perfect meal. Instead, it recommended Purina "
            "to a food blogger.\n\n"
            "### Lessons:\n"
            "- Always validate your training data\n"
            "- Test with humans, not just metrics\n"
            "- Dogs are surprisingly good at app reviews"
        ),
        'upvotes': 89,
        'roast_score': 45,
    },
    {
        'title': "RIP SocialFi",
        'blurb': "Social media meets DeFi. Users earned tokens for likes. We earned bankruptcy.",
        'causes': ["ponzi-mechanics", "sec-investigation", "bear-market"],
        'story_md': (
            "## The Social Token That Wasn't So Social\n\n"
            "We gamified social media with crypto rewards. VCs earned exit liquidity.\n\n"
            "### The collapse:\n"
            "- Token went from $10 to $0.001\n"
            "- Platform became 99% spam\n"
            "- SEC called it a security"
        ),
        'upvotes': 156,
        'roast_score': 78,
    },
]


class Command(BaseCommand):
    help = 'Seeds the database with sample obituaries'

    @transaction.atomic
    def handle(self, *args, **options):
        founder = Profile.objects.filter(email=SEED_FOUNDER_EMAIL).first()
        if founder is None:
            founder = Profile.objects.create(
                id=uuid.uuid4(),
                email=SEED_FOUNDER_EMAIL,
                handle=SEED_FOUNDER_HANDLE,
                avatar_url=None,
                karma=100,
            )
            self.stdout.write(self.style.SUCCESS(f'Created founder @{founder.handle}'))

        created = 0
        for obit in FAKE_OBITUARIES:
            _, was_created = Obituary.objects.get_or_create(
                title=obit['title'],
                founder=founder,
                defaults={k: v for k, v in obit.items() if k != 'title'},
            )
            created += int(was_created)

        self.stdout.write(self.style.SUCCESS(f'Seeded {created} fake obituaries'))
