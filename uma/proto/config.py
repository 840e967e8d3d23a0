import os


def env(name, default=None):
    """Access to environment variables

    Allows overriding the codec's limits and prefixes without touching the
    code, falling back to `default` if the variable is not set.
    """
    if name in os.environ:
        return os.environ[name]
    else:
        return default


# Maximum nesting depth when decoding composites embedded in other
# composites. The fixed record layouts only nest two levels deep.
MAX_NESTING_DEPTH = int(env("UMA_TLV_MAX_DEPTH", "16"))

# Human readable prefix used for the bech32 form of an invoice.
INVOICE_HRP = env("UMA_INVOICE_HRP", "uma")
