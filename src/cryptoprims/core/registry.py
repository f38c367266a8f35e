import logging

# setup logging
logger = logging.getLogger("CryptoPrims")

# dictionary to store implementations
PRIMITIVE_IMPLEMENTATIONS = {}

def register_implementation(name):
    # register a primitive implementation (class or factory)
    def decorator(impl_class):
        PRIMITIVE_IMPLEMENTATIONS[name] = impl_class
        return impl_class
    return decorator

def get_implementation(name):
    # get an implementation by name
    return PRIMITIVE_IMPLEMENTATIONS.get(name)

def list_implementations():
    # list all registered implementations
    return list(PRIMITIVE_IMPLEMENTATIONS.keys())

def register_all_implementations():
    # import here to avoid circular imports
    try:
        from cryptoprims.twofish.implementation import TWOFISH_IMPLEMENTATIONS

        for name, impl in TWOFISH_IMPLEMENTATIONS.items():
            PRIMITIVE_IMPLEMENTATIONS[name] = impl

        logger.info(f"Registered Twofish implementations: {', '.join(TWOFISH_IMPLEMENTATIONS.keys())}")
    except ImportError as e:
        logger.warning(f"Could not import Twofish implementations: {str(e)}")

    try:
        from cryptoprims.sha256.implementation import SHA256_IMPLEMENTATIONS

        for name, impl in SHA256_IMPLEMENTATIONS.items():
            PRIMITIVE_IMPLEMENTATIONS[name] = impl

        logger.info(f"Registered SHA-256 implementations: {', '.join(SHA256_IMPLEMENTATIONS.keys())}")
    except ImportError as e:
        logger.warning(f"Could not import SHA-256 implementations: {str(e)}")

    # log all registered implementations
    logger.info(f"Total registered implementations: {len(PRIMITIVE_IMPLEMENTATIONS)}")
    return PRIMITIVE_IMPLEMENTATIONS
