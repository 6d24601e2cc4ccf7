"""Flask CLI commands for admin operations."""
import click


DEMO_PRODUCTS = [
    {
        "name": "Trail Running Shoe",
        "description": "Lightweight trail shoe with a grippy outsole.",
        "price": 89.99,
        "category": "Footwear",
        "brand": "Stride",
        "tags": ["running", "trail", "outdoor"],
        "variants": [
            {"color": "Red", "size": "M", "stock": 12},
            {"color": "Black", "size": "L", "stock": 4},
        ],
    },
    {
        "name": "Organic Cotton Tee",
        "description": "Everyday crew-neck tee in organic cotton.",
        "price": 19.5,
        "category": "Clothing",
        "tags": ["cotton", "basics"],
        "variants": [
            {"color": "White", "size": "S", "stock": 30},
            {"color": "Navy Blue", "size": "M", "stock": 0},
        ],
    },
    {
        "name": "Wireless Earbuds",
        "description": "Noise-cancelling earbuds with a pocket charging case.",
        "price": 129.0,
        "category": "Electronics",
        "brand": "Sonic",
        "tags": ["audio", "wireless"],
        "variants": [{"color": "Graphite", "size": "Free Size", "stock": 25}],
    },
]

DEMO_STUDENTS = [
    {"name": "Asha Rao", "age": 20, "course": "Computer Science", "email": "asha@example.com"},
    {"name": "Leo Park", "age": 22, "course": "Law", "email": "leo@example.com"},
]

DEMO_ACCOUNTS = [
    {"name": "alice", "balance": 1000},
    {"name": "bob", "balance": 250},
]


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        from catalog_api.extensions import db

        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Seed demo products, students and accounts (idempotent)."""
        from catalog_api.models import Account, Product, Student
        from catalog_api.services import account_service, product_service, student_service

        if Product.query.first():
            click.echo("Products already exist — skipping product seed.")
        else:
            for payload in DEMO_PRODUCTS:
                product_service.create_product(payload)
            click.echo(f"Seeded {len(DEMO_PRODUCTS)} demo products.")

        if not Student.query.first():
            for payload in DEMO_STUDENTS:
                student_service.create_student(payload)
            click.echo(f"Seeded {len(DEMO_STUDENTS)} demo students.")

        if not Account.query.first():
            for payload in DEMO_ACCOUNTS:
                account_service.create_account(payload)
            click.echo(f"Seeded {len(DEMO_ACCOUNTS)} demo accounts.")

    @app.cli.command("create-product")
    @click.option("--name", required=True)
    @click.option("--price", required=True, type=float)
    @click.option("--category", default="Other")
    @click.option("--color", required=True)
    @click.option("--size", default="Free Size")
    @click.option("--stock", default=0, type=int)
    @click.option("--tags", default="")
    def create_product(name, price, category, color, size, stock, tags):
        """Create a product with a single variant (for testing)."""
        from catalog_api.errors import ServiceError
        from catalog_api.services.product_service import create_product

        payload = {
            "name": name,
            "price": price,
            "category": category,
            "tags": [t.strip() for t in tags.split(",") if t.strip()],
            "variants": [{"color": color, "size": size, "stock": stock}],
        }
        try:
            product = create_product(payload)
        except ServiceError as e:
            raise click.ClickException(e.message)
        click.echo(
            f"Created: {product.id} — {product.name} — SKU {product.variants[0].sku}"
        )

    @app.cli.command("stats")
    def stats():
        """Show product statistics."""
        from catalog_api.services.product_service import get_statistics

        s = get_statistics()
        click.echo(f"Total products: {s['totalProducts']}")
        for row in s["categoryDistribution"]:
            click.echo(
                f"  {row['category']}: {row['count']} (avg {row['averagePrice']:.2f})"
            )
        variants = s["variantStats"]
        click.echo(
            f"Variants: {variants['totalVariants']}, stock: {variants['totalStock']}"
        )
