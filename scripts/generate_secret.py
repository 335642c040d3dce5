#!/usr/bin/env python3
"""
Generate a secret for contact PII encryption.

Prints a fresh PII_SECRET and explains how to rotate the current one.
The previous secret must stay listed in PII_RETIRED_SECRETS until every
stored order has been re-encrypted, or old contact details become unreadable.

Usage:
    python scripts/generate_secret.py
"""

import os

from vault import generate_secret


def main():
    secret = generate_secret()
    current = os.getenv("PII_SECRET")

    print("=" * 60)
    print("PII Secret Generator")
    print("=" * 60)

    print("\n1. Set the new secret in config/.env for both services:")
    print(f"   PII_SECRET={secret}")

    if current:
        print("\n2. Keep the current secret readable during rotation:")
        print(f'   PII_RETIRED_SECRETS=["{current}"]')
    else:
        print("\n2. No PII_SECRET is set in this environment - nothing to rotate.")

    print("\n" + "=" * 60)
    print("Never commit the secret to source control.")
    print("=" * 60)


if __name__ == "__main__":
    main()
