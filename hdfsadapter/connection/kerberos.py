"""
Kerberos login from a keytab file.

MIT Kerberos can obtain initial credentials from a client keytab through the credential
store extension of GSSAPI, which makes it possible to log in without kinit. The tickets
end up in a file ticket cache that the HDFS client is pointed at afterwards.
"""

from hdfsadapter.errors import LoginError


def login_from_keytab(principal: str, keytab: str, ticket_cache: str) -> None:
    """Obtain a ticket granting ticket for the principal into the ticket cache."""
    try:
        import gssapi
    except ImportError as e:
        raise LoginError("keytab authentication requires the gssapi package") from e

    if "acquire_cred_from" not in dir(gssapi.raw):
        raise LoginError("GSSAPI library lacks the credential store extension")

    store = {"client_keytab": keytab, "ccache": f"FILE:{ticket_cache}"}

    try:
        name = gssapi.Name(principal, gssapi.NameType.kerberos_principal)
        credentials = gssapi.Credentials(name=name, usage="initiate", store=store)

        # Inquiring forces the initial ticket to be fetched from the keytab
        credentials.inquire()
    except gssapi.exceptions.GSSError as e:
        raise LoginError("kerberos login from keytab failed") from e
