"""Shared helpers for API and service tests."""

from immy.db.models import Child, User


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register_user(client, name="Alice", email="a@x.com", password="pw12345") -> dict:
    """Register through the API and return the envelope's data."""
    r = await client.post(
        "/register", json={"name": name, "email": email, "password": password}
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]


async def add_child(client, token: str, name="Emma", age=5, interests="space") -> dict:
    r = await client.post(
        "/children",
        json={"name": name, "age": age, "interests": interests},
        headers=bearer(token),
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]


async def create_user_row(session, name="Pat", email="pat@x.com", password_hash="x") -> User:
    user = User(name=name, email=email, password_hash=password_hash)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_child_row(session, user_id: int, name="Kid", age=4) -> Child:
    child = Child(user_id=user_id, name=name, age=age)
    session.add(child)
    await session.commit()
    await session.refresh(child)
    return child
