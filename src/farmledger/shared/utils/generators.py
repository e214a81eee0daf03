from cuid2 import cuid_wrapper

# Log entry ids must be collision resistant across processes
cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier"""
    result = cuid_generator()
    assert isinstance(result, str)
    return result
