from __future__ import annotations

from argon2 import PasswordHasher, Type  # type: ignore[import-not-found]
from starlette.concurrency import run_in_threadpool  # type: ignore[import-not-found]

# Argon2id with 19 MiB memory, 2 iterations, 1 lane (OWASP baseline).
_HASHER = PasswordHasher(
    time_cost=2,
    memory_cost=19456,
    parallelism=1,
    hash_len=32,
    salt_len=16,
    type=Type.ID,
)


def hash_password(password: str) -> str:
    """
    Argon2id password hash in PHC string format:
      $argon2id$v=19$m=19456,t=2,p=1$<salt_b64>$<hash_b64>

    A fresh random salt is drawn on every call.
    """
    if not password:
        raise ValueError("password must be non-empty")
    return _HASHER.hash(password)


async def hash_password_async(password: str) -> str:
    # The KDF is CPU and memory bound; keep it off the event loop.
    return await run_in_threadpool(hash_password, password)
