"""
CIS People - Mozilla CIS Person API client

This package resolves a person record from the Mozilla CIS Person API by one of several
alternative lookup keys. The Person API is protected by an Auth0 machine-to-machine
OAuth 2.0 client-credentials grant.

Key Components:
- person_api: Token acquisition, authenticated lookups, and response normalization
- app: Settings, the people query adapter, and the command line entry point

Lookup Flow:
1. The caller supplies any of email, id, or username
2. The lookup key is selected, rejecting queries with no identifier
3. An access token is acquired from Auth0 (once, then reused)
4. The person is fetched by primary email with a bearer token
5. The enveloped JSON response is normalized into a flat Person record

The Person API is read-only from this client's perspective.
"""
