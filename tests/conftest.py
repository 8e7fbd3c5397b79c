from typing import List

import pytest

from diskops.config import Settings
from diskops.device import CurrentUserCache, DeviceOps
from diskops.executor import CommandExecutor
from diskops.schema import CurrentUser

from tests.helpers import ScriptedRunner, fixture_text, ok


@pytest.fixture
def runner() -> ScriptedRunner:
    return ScriptedRunner({
        "df": ok(fixture_text("df_source_fstype.txt")),
        "sgdisk": ok(fixture_text("sgdisk_p_sda.txt")),
        "mount": ok(fixture_text("mount_output.txt")),
        "lsblk": ok(fixture_text("lsblk_pkname.txt")),
        "umount": ok(),
        "mkfs.ext4": ok(),
        "chown": ok(),
    })


@pytest.fixture
def user_lookups() -> List[int]:
    """Records each run of the stub user resolver."""
    return []


@pytest.fixture
def user_cache(user_lookups) -> CurrentUserCache:
    def resolve() -> CurrentUser:
        user_lookups.append(1)
        return CurrentUser(name="builder", uid=1000, gid=1000)
    return CurrentUserCache(resolver=resolve)


@pytest.fixture
def ops(runner, user_cache) -> DeviceOps:
    return DeviceOps(executor=CommandExecutor(runner), settings=Settings(), user_cache=user_cache)
