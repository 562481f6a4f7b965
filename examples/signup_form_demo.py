# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Signup Form Demo: validating form data without a UI.

Walks through the calls a UI integration makes: field changes, a rejected
submit, a server-side error injected into the form, a successful submit and
a schema typo caught when the schema is built.

Run with:
    python examples/signup_form_demo.py
"""

import os
import tempfile

from formschema import FileDescriptor, FormSession, InvalidSchemaError, load_schema

SIGNUP_SCHEMA = """
metadata:
  name: signup-demo

schema:
  login:
    required: Login is required
    min: [4, Login must have at least 4 characters]
    pattern: [alpha, Login may not contain punctuation]
  email:
    required: Email is required
    pattern: [email, Email address looks wrong]
  password:
    required: Password is required
    min: [8, Password must have at least 8 characters]
  confirm:
    equalField: [password, Passwords do not match]
  avatar:
    extAllowed: [[png, jpg], Avatar must be a PNG or JPEG image]
    sizeLte: [1048576, Avatar must be smaller than 1 MiB]
"""


def banner(title):
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)


def show(errors):
    if not errors:
        print("  (no errors)")
    for field, messages in errors.items():
        for message in messages:
            print(f"  {field:10} {message}")


def main():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write(SIGNUP_SCHEMA)
        schema_path = f.name

    try:
        session = FormSession(load_schema(schema_path))
    finally:
        os.unlink(schema_path)

    banner("DEMO 1: Field-by-field validation")
    data = {"login": "bo", "email": "bob-at-example", "password": "", "confirm": ""}
    session.change("login", data)
    session.change("email", data)
    show(session.errors)
    print(f"\n  Status: {session.status.value}")

    banner("DEMO 2: Rejected submit")
    session.submit(data)
    show(session.errors)

    banner("DEMO 3: Server error injected into the form")
    session.set_errors({"login": ["Login 'bobby' is already taken"]})
    show(session.errors)

    banner("DEMO 4: Successful submit")
    data = {
        "login": "robert",
        "email": "robert@example.com",
        "password": "correct horse",
        "confirm": "correct horse",
        "avatar": FileDescriptor(name="robert.png", size=24_000, type="image/png"),
    }
    session.submit(data, on_valid=lambda values: print(f"  Submitted as {values['login']}"))
    print(f"  Status: {session.status.value}")

    banner("DEMO 5: Schema typo caught at load time")
    try:
        FormSession({"login": {"minLength": [4, "Too short"]}})
        print("  Result: FAIL - schema accepted")
    except InvalidSchemaError as e:
        print("  Result: SUCCESS - schema rejected")
        print(f"    {e}")


if __name__ == "__main__":
    main()
