import argparse
import asyncio

from app.api.core.logger import setup_logging
from app.api.db.database import AsyncSessionLocal, init_db
from app.api.v1.services.registration import RegistrationService


def parse_args():
    parser = argparse.ArgumentParser(description="Seed a CMS admin user.")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--first-name", default="")
    parser.add_argument("--last-name", default="")
    return parser.parse_args()


async def seed(args):
    await init_db()
    async with AsyncSessionLocal() as session:
        user, created = await RegistrationService.create_admin_account(
            email=args.email,
            password=args.password,
            session=session,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    if created:
        print(f"Admin user created: {user.email}")
    else:
        print(f"Existing user promoted to admin: {user.email}")


def main():
    setup_logging()
    asyncio.run(seed(parse_args()))


if __name__ == "__main__":
    main()
