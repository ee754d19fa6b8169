"""Authentication and authorization.

Accounts sign in with email/password and receive a signed bearer token
(HS256 JWT, 24h by default). Protected routes resolve that token to an
AuthenticatedSubject; child-scoped routes then go through the
ownership resolver in immy.services.ownership.
"""
