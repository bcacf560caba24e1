"""Authentication and authorization.

Learn: Four pieces, leaf-first:
1. password - bcrypt hashing and verification
2. jwt - signs and verifies the bearer token carried in x-auth-token
3. dependencies - get_current_user, the per-request token verifier
4. ownership - checks that the caller owns the record it mutates

The signing secret is never read from a global here: callers pass it
in from Settings.
"""
