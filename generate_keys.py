# generate_keys.py
import argparse
import logging
import os
from dataclasses import dataclass

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from config import DEFAULT_KEY_SIZE, MIN_KEY_SIZE
from errors import GenerationError

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT = 65537


@dataclass(frozen=True)
class KeyPair:
    public_key: str
    private_key: str

    def to_dict(self) -> dict:
        return {"public_key": self.public_key, "private_key": self.private_key}

    @classmethod
    def from_dict(cls, data: dict) -> "KeyPair":
        # Absent or non-string fields read back as empty strings
        public_key = data.get("public_key")
        private_key = data.get("private_key")
        return cls(
            public_key=public_key if isinstance(public_key, str) else "",
            private_key=private_key if isinstance(private_key, str) else "",
        )


def generate(key_size: int = DEFAULT_KEY_SIZE) -> KeyPair:
    """
    Generate a fresh RSA key pair.

    The private key is PEM "RSA PRIVATE KEY" (PKCS#1, unencrypted) and the
    public key is PEM "PUBLIC KEY" (SubjectPublicKeyInfo).
    """
    if key_size < MIN_KEY_SIZE:
        raise GenerationError("Failed to generate RSA keys")

    try:
        private_key = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=key_size)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise GenerationError("Failed to generate RSA keys") from exc

    try:
        priv_pem = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption()
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise GenerationError("Failed to encode private key") from exc

    try:
        pub_pem = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise GenerationError("Failed to encode public key") from exc

    logger.debug("Generated %d-bit RSA key pair", key_size)
    return KeyPair(public_key=pub_pem.decode("ascii"), private_key=priv_pem.decode("ascii"))


def write_pem_files(key_pair: KeyPair, out_dir: str) -> tuple:
    """Write private_key.pem (0600) and public_key.pem into out_dir."""
    os.makedirs(out_dir, exist_ok=True)
    priv_path = os.path.join(out_dir, "private_key.pem")
    pub_path = os.path.join(out_dir, "public_key.pem")

    fd = os.open(priv_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="ascii") as f:
        f.write(key_pair.private_key)
    os.chmod(priv_path, 0o600)

    with open(pub_path, "w", encoding="ascii") as f:
        f.write(key_pair.public_key)

    return priv_path, pub_path


def main(argv=None):
    p = argparse.ArgumentParser(description="Generate an RSA key pair as PEM files.")
    p.add_argument("--out", default="keys", help="output directory (default: keys)")
    p.add_argument("--key-size", type=int, default=DEFAULT_KEY_SIZE, help="RSA modulus size in bits")
    args = p.parse_args(argv)
    if args.key_size < MIN_KEY_SIZE:
        p.error(f"--key-size must be at least {MIN_KEY_SIZE}")

    priv_path, pub_path = write_pem_files(generate(args.key_size), args.out)
    print(f"Keys generated: {priv_path}, {pub_path}")


if __name__ == "__main__":
    main()
