import sys


def pytest_make_parametrize_id(config, val, argname):
    # pytest builds parameter ids with str(); ints past the interpreter's
    # int -> str digit limit would abort collection.
    if isinstance(val, int) and not isinstance(val, bool):
        limit = sys.get_int_max_str_digits()
        if limit and val.bit_length() > limit * 3:
            return f"{argname}-huge-int"
    return None
