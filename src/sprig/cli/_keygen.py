"""``sprig keygen``: print a fresh key and IV for ``sprig.security.Cipher``."""

import argparse
import secrets

from sprig.security.cipher import IV_SIZE, KEY_SIZE


def run_keygen(args: argparse.Namespace) -> None:
    print(f"KEY={secrets.token_hex(KEY_SIZE)}")
    print(f"IV={secrets.token_hex(IV_SIZE)}")
