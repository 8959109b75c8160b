from __future__ import annotations

import random
from datetime import date, time, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.orders.constants import OrderState
from modules.orders.models import Order, StagedItem
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.products.models import Product
from modules.users.constants import Role

SEED_USERS = [
    ("barista", "barista@bakery.local", "Malin", "Castro", Role.BARISTA, False),
    ("baker", "baker@bakery.local", "Heidi", "Carter", Role.BAKER, False),
    ("admin", "admin@bakery.local", "Göran", "Rich", Role.ADMIN, True),
]

CATALOG = [
    ("Strawberry Bun", Decimal("3.50")),
    ("Blueberry Cheese Cake", Decimal("28.00")),
    ("Banana Pie", Decimal("18.50")),
    ("Croissant", Decimal("2.20")),
    ("Bagel", Decimal("2.80")),
    ("Cinnamon Roll", Decimal("3.90")),
    ("Raspberry Muffin", Decimal("3.10")),
    ("Chocolate Cake", Decimal("32.00")),
    ("Apple Strudel", Decimal("16.00")),
    ("Vanilla Cupcake", Decimal("2.90")),
]

FIRST_NAMES = ["Ana", "Bruno", "Carla", "Daniel", "Eva", "Filip", "Greta", "Hugo"]
LAST_NAMES = ["Lindqvist", "Moreau", "Silva", "Nowak", "Jensen", "Rossi", "Kim"]
DUE_TIMES = [time(8, 0), time(10, 30), time(12, 0), time(14, 0), time(16, 0)]

# Orders due in the past have been handed over (or not)
PAST_STATE_WEIGHTS = [
    (OrderState.DELIVERED, 0.85),
    (OrderState.CANCELLED, 0.10),
    (OrderState.PROBLEM, 0.05),
]
FUTURE_STATE_WEIGHTS = [
    (OrderState.NEW, 0.45),
    (OrderState.CONFIRMED, 0.35),
    (OrderState.READY, 0.15),
    (OrderState.PROBLEM, 0.05),
]


class Command(BaseCommand):
    help = "Seed database with realistic bakery data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders-per-day",
            type=int,
            default=3,
            help="Average number of orders per day over the last three years.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding bakery data...")

        users = self._seed_users()
        products = self._seed_products()
        orders_created = self._seed_orders(
            users, products, options["orders_per_day"]
        )

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={len(users)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> list:
        User = get_user_model()
        users = []
        for username, email, first, last, role, locked in SEED_USERS:
            user = User.objects.filter(username=username).first()
            if user is None:
                user = User(
                    username=username,
                    email=email,
                    first_name=first,
                    last_name=last,
                    role=role,
                    locked=locked,
                    is_staff=role == Role.ADMIN,
                )
                user.set_password(username)
                user.save()
            users.append(user)
        return users

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        for name, price in CATALOG:
            product, _ = Product.objects.alive().get_or_create(
                name=name, defaults={"price": price}
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(
        self, users: list, products: list[Product], orders_per_day: int
    ) -> int:
        self.stdout.write("Creating orders...")
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        repository = OrderDjangoRepository()
        staff = [user for user in users if not user.locked] or users
        today = timezone.localdate()
        start = date(today.year - 2, 1, 1)
        end = today + timedelta(days=14)

        orders_created = 0
        day = start
        while day <= end:
            for _ in range(random.randint(0, orders_per_day * 2)):
                author = random.choice(staff)
                order = Order.for_user(author)
                order.customer.full_name = (
                    f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"
                )
                order.customer.phone_number = "+46 70 %07d" % random.randint(0, 9999999)
                order.due_date = day
                order.due_time = random.choice(DUE_TIMES)
                order.replace_items(
                    StagedItem(product, random.randint(1, 6))
                    for product in random.sample(products, k=random.randint(1, 4))
                )
                order.change_state(author, self._pick_state(day < today))
                repository.save(order)
                orders_created += 1
            day += timedelta(days=1)

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created

    @staticmethod
    def _pick_state(past: bool) -> OrderState:
        weights = PAST_STATE_WEIGHTS if past else FUTURE_STATE_WEIGHTS
        states = [state for state, _ in weights]
        return random.choices(states, weights=[w for _, w in weights], k=1)[0]
