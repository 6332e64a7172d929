"""
ecsign CLI — key generation, signing and fail-closed verification.

Usage:
    python -m ecsign_cli keygen --out keys.json
    python -m ecsign_cli sign --key keys.json alice 100 true
    python -m ecsign_cli verify --public-key keys.json --signature <hex> alice 100 true
    python -m ecsign_cli hash alice 100 true

KEY arguments accept a literal hex/Base64/PEM string, a PEM file, or a
KeyBundle JSON file written by ``keygen``.  Fields are taken as strings; the
canonical form is plain concatenation, so ``100`` and ``true`` here sign the
same bytes as the integer 100 and the boolean True in library code.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ecsign.canonicalize import concatenate
from ecsign.codec import bytes_to_hex, decode_flexible, hex_to_bytes
from ecsign.crypto import CURVE_NAME, SIGNATURE_ALGORITHM, KeyPair, generate_keypair
from ecsign.errors import SigningError
from ecsign.hasher import digest_fields_hex
from ecsign.schema import KeyBundle
from ecsign.signature import sign as sign_fields
from ecsign.signature import sign_hash, verify_hash

from .config import load_config_from_env

logger = logging.getLogger(__name__)

console = Console()


def _resolve_key(value: Optional[str], private: bool) -> str:
    """Turn a KEY argument into an encoded key string."""
    if not value:
        kind = "private" if private else "public"
        raise click.UsageError(f"No {kind} key given (option or ECSIGN_ env var)")

    path = Path(value)
    try:
        is_file = path.is_file()
    except OSError:  # e.g. a long PEM string is not a valid path
        is_file = False
    if not is_file:
        return value

    logger.debug(f"Loading key from {path}")
    text = path.read_text()
    if text.lstrip().startswith("{"):
        bundle = KeyBundle.model_validate_json(text)
        if private:
            if not bundle.private_key_pem:
                raise click.ClickException(f"{path} holds no private key")
            return bundle.private_key_pem
        return bundle.public_key_pem
    return text


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: ECSIGN_LOG_LEVEL or WARNING)")
@click.pass_context
def main(ctx: click.Context, log_level: Optional[str]):
    """ecsign — secp256k1 signing and verification tool."""
    config = load_config_from_env()
    if log_level:
        config.log_level = log_level.upper()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = config


@main.command()
@click.option("--out", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write a KeyBundle JSON file instead of printing PEMs")
@click.option("--public-out", type=click.Path(dir_okay=False), default=None,
              help="Also write a public-only KeyBundle")
def keygen(out: Optional[str], public_out: Optional[str]):
    """Generate a new secp256k1 key pair."""
    kp = generate_keypair()
    bundle = KeyBundle.from_keypair(kp)

    if out:
        Path(out).write_text(bundle.model_dump_json(indent=2))
        console.print(f"[green]✓ Key pair {kp.kid} written to {out}[/green]")
    else:
        console.print(Panel(f"Key ID: {kp.kid}", style="bold blue"))
        click.echo(kp.export_private_pem())
        click.echo(kp.export_public_pem())

    if public_out:
        Path(public_out).write_text(bundle.public_only().model_dump_json(indent=2))
        console.print(f"[green]✓ Public key written to {public_out}[/green]")


@main.command("hash")
@click.argument("fields", nargs=-1)
def hash_cmd(fields: tuple[str, ...]):
    """Print the canonical message and SHA-256 digest of FIELDS."""
    click.echo(f"canonical: {concatenate(*fields)}")
    click.echo(f"sha256:    {digest_fields_hex(*fields)}")


@main.command()
@click.option("--key", "-k", default=None, help="Private key (hex/Base64/PEM or file)")
@click.option("--hash", "hash_hex", default=None, help="Sign this hex digest instead of FIELDS")
@click.argument("fields", nargs=-1)
@click.pass_obj
def sign(config, key: Optional[str], hash_hex: Optional[str], fields: tuple[str, ...]):
    """Sign FIELDS (or a digest) and print the hex signature."""
    private_key = _resolve_key(key or config.private_key, private=True)
    try:
        if hash_hex is not None:
            signature = sign_hash(private_key, hash_hex)
        else:
            signature = sign_fields(private_key, *fields)
    except SigningError as e:
        cause = f" ({e.__cause__})" if e.__cause__ else ""
        raise click.ClickException(f"{e}{cause}")
    click.echo(signature)


@main.command()
@click.option("--public-key", "-k", default=None, help="Public key (hex/Base64/PEM or file)")
@click.option("--signature", "-s", required=True, help="Signature (hex or Base64)")
@click.option("--hash", "hash_hex", default=None, help="Verify against this hex digest instead of FIELDS")
@click.argument("fields", nargs=-1)
@click.pass_obj
def verify(config, public_key: Optional[str], signature: str,
           hash_hex: Optional[str], fields: tuple[str, ...]):
    """Verify a signature. Exits 1 when it is not valid (fail-closed)."""
    encoded_key = _resolve_key(public_key or config.public_key, private=False)
    digest_hex = hash_hex if hash_hex is not None else digest_fields_hex(*fields)

    if verify_hash(encoded_key, signature, digest_hex):
        console.print("[green]✓ Signature is VALID[/green]")
    else:
        console.print("[red]✗ Signature is INVALID[/red]")
        sys.exit(1)


@main.command()
@click.option("--public-key", "-k", default=None, help="Recipient public key (hex/Base64/PEM or file)")
@click.argument("text")
@click.pass_obj
def encrypt(config, public_key: Optional[str], text: str):
    """Encrypt TEXT for a public key; prints hex ciphertext."""
    encoded_key = _resolve_key(public_key or config.public_key, private=False)
    try:
        kp = KeyPair.from_keys(public_key_bytes=decode_flexible(encoded_key))
        click.echo(bytes_to_hex(kp.encrypt(text.encode("utf-8"))))
    except SigningError as e:
        raise click.ClickException(str(e))


@main.command()
@click.option("--key", "-k", default=None, help="Private key (hex/Base64/PEM or file)")
@click.argument("ciphertext")
@click.pass_obj
def decrypt(config, key: Optional[str], ciphertext: str):
    """Decrypt hex CIPHERTEXT with a private key."""
    encoded_key = _resolve_key(key or config.private_key, private=True)
    try:
        kp = KeyPair.from_keys(private_key_bytes=decode_flexible(encoded_key))
        click.echo(kp.decrypt(hex_to_bytes(ciphertext)).decode("utf-8"))
    except SigningError as e:
        raise click.ClickException(str(e))
    except UnicodeDecodeError:
        raise click.ClickException("Decrypted data is not UTF-8 text")


@main.command()
@click.argument("key")
def inspect(key: str):
    """Show curve, key ID and encodings of KEY (private or public)."""
    try:
        encoded = _resolve_key(key, private=True)
    except click.ClickException:
        encoded = _resolve_key(key, private=False)
    try:
        raw = decode_flexible(encoded)
    except SigningError as e:
        raise click.ClickException(str(e))

    try:
        kp = KeyPair.from_keys(private_key_bytes=raw).with_derived_public_key()
    except SigningError:
        try:
            kp = KeyPair.from_keys(public_key_bytes=raw)
        except SigningError as e:
            raise click.ClickException(f"Not a secp256k1 key: {e}")

    console.print(Panel("ecsign Key Inspection", style="bold cyan"))
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Property", width=14)
    table.add_column("Value")
    table.add_row("Curve", CURVE_NAME)
    table.add_row("Algorithm", SIGNATURE_ALGORITHM)
    table.add_row("Key ID", kp.kid)
    table.add_row("Private key", "[green]YES[/green]" if kp.has_private_key else "[red]NO[/red]")
    table.add_row("Public key", "[green]YES[/green]" if kp.has_public_key else "[red]NO[/red]")
    console.print(table)
    click.echo(kp.export_public_pem())


if __name__ == "__main__":
    main()
