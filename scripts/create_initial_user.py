"""Utility script to create a user and print a token for the realtime channel."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from socialwire.application.use_cases.users import register_user
from socialwire.infrastructure.database import SessionLocal, initialize_database
from socialwire.infrastructure.repositories import FriendshipRepository, UserRepository
from socialwire.infrastructure.security import create_user_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a SocialWire user, optionally befriending an existing one.",
    )
    parser.add_argument("--first-name", default="Demo", help="Nombre del usuario (por defecto: Demo)")
    parser.add_argument("--last-name", default="", help="Apellido del usuario (opcional)")
    parser.add_argument(
        "--email",
        default="demo@example.com",
        help="Correo electrónico del usuario (por defecto: demo@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Contraseña del usuario. Si no se proporciona se solicitará interactivamente.",
    )
    parser.add_argument(
        "--friend-email",
        default=None,
        help="Correo de un usuario existente que será agregado como amigo.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Ingrese la contraseña del usuario: ")
    if not password:
        raise SystemExit("No se proporcionó una contraseña válida.")

    initialize_database()

    session = SessionLocal()
    try:
        user = register_user(
            session,
            first_name=args.first_name,
            last_name=args.last_name,
            email=args.email,
            password=password,
        )
        friend = None
        if args.friend_email:
            friend = UserRepository(session).get_by_email(args.friend_email)
            if friend is None:
                raise ValueError(f"No existe un usuario con el correo {args.friend_email}")
            FriendshipRepository(session).add_friendship(user.id, friend.id)
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"No se pudo crear el usuario: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error al guardar el usuario en la base de datos: {exc}") from exc
    else:
        print(
            "Usuario creado exitosamente:\n"
            f"  ID: {user.id}\n"
            f"  Nombre: {user.full_name}\n"
            f"  Email: {user.email}\n"
            f"  Amigo: {friend.email if friend else '-'}\n"
            f"  Token: {create_user_token(user.id)}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
