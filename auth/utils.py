import bcrypt


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hash_: str) -> bool:
    if not password or not hash_:
        return False
    return bcrypt.checkpw(password.encode(), hash_.encode())
