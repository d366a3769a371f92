# conftest.py
import glob

import pytest

@pytest.fixture(autouse=True)
def check_stray_pot_files():
    before = set(glob.glob('*.pot'))
    yield
    after = set(glob.glob('*.pot'))
    created = after - before
    if created:
        # This will show you exactly which test created it
        pytest.fail(f"Test created {sorted(created)} in the working directory and didn't clean up", pytrace=False)
