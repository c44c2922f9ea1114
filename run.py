import click

from swellshare import create_app, db
from swellshare.models import Message, Payment, PlatformSetting, Profile, Rental, Surfboard, User
from swellshare.services import AuthService, SurfboardService

app = create_app()

SAMPLE_OWNERS = [
    ("mike@swellshare.dev", "Mike Johnson"),
    ("sarah@swellshare.dev", "Sarah Wilson"),
    ("tom@swellshare.dev", "Tom Davis"),
]

SAMPLE_BOARDS = [
    {
        "title": "Beginner Friendly Foam Board",
        "description": "Perfect for beginners, soft top foam board, very stable and buoyant.",
        "price_per_day": "25",
        "location": "Santa Monica, CA",
        "board_type": "Foam",
        "length": "8",
        "image_url": "https://images.unsplash.com/photo-1531722569936-825d3dd91b15?q=80&w=1470&auto=format&fit=crop",
    },
    {
        "title": "Performance Shortboard",
        "description": "High-performance shortboard for experienced surfers. Great for tight turns and barrels.",
        "price_per_day": "40",
        "location": "Huntington Beach, CA",
        "board_type": "Shortboard",
        "length": "5.10",
        "width": "19.25",
        "thickness": "2.4",
        "volume": "28.5",
        "image_url": "https://images.unsplash.com/photo-1501520158826-76df880863a3?q=80&w=1470&auto=format&fit=crop",
    },
    {
        "title": "Longboard for Cruising",
        "description": "Classic 9ft longboard, perfect for small waves and cruising.",
        "price_per_day": "35",
        "location": "Malibu, CA",
        "board_type": "Longboard",
        "length": "9",
        "image_url": "https://images.unsplash.com/photo-1455264745730-cb3b76250ae8?q=80&w=1544&auto=format&fit=crop",
    },
]


@app.shell_context_processor
def make_shell_context():
    return {
        "db": db,
        "User": User,
        "Profile": Profile,
        "Surfboard": Surfboard,
        "Rental": Rental,
        "Payment": Payment,
        "Message": Message,
        "PlatformSetting": PlatformSetting,
    }


@app.cli.command("seed-db")
@click.option("--password", default="surfsup123", show_default=True, help="Password for the sample owners.")
def seed_db_command(password):
    """Add sample owners and surfboard listings."""
    created = 0
    for (email, full_name), listing in zip(SAMPLE_OWNERS, SAMPLE_BOARDS):
        owner = User.query.filter_by(email=email).first()
        if owner is None:
            owner = AuthService.register_user(email, password, full_name=full_name)
        if Surfboard.query.filter_by(owner_id=owner.id, title=listing["title"]).first():
            continue
        board = SurfboardService.create_surfboard(owner.id, listing)
        if not board.is_approved:
            SurfboardService.approve(board.id)
        created += 1
    click.echo(f"Seeded {created} surfboard listing(s).")


if __name__ == "__main__":
    app.run()
