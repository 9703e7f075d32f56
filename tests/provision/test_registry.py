import pytest

from dockhand.errors import UnknownOsReleaseError
from dockhand.provision.models import OsReleaseInfo
from dockhand.provision.redhat import RedHatProvisioner
from dockhand.provision.registry import detect_provisioner, lookup, register, registered


@pytest.mark.parametrize("os_id", ["rhel", "centos", "fedora"])
def test_redhat_family_claims_ids(os_id):
    assert lookup(OsReleaseInfo(id=os_id)).family == "redhat"


def test_lookup_falls_back_to_id_like():
    entry = lookup(OsReleaseInfo(id="rocky", id_like=("rhel", "centos", "fedora")))
    assert entry.factory is RedHatProvisioner


def test_lookup_unknown():
    with pytest.raises(UnknownOsReleaseError):
        lookup(OsReleaseInfo(id="ubuntu", id_like=("debian",)))


def test_duplicate_family_rejected():
    assert "redhat" in registered()
    with pytest.raises(ValueError):
        register("redhat", RedHatProvisioner, os_ids=("rhel",))


def test_detect_provisioner(driver, channel):
    prov = detect_provisioner(driver, channel, packages=["curl", "git"])
    assert isinstance(prov, RedHatProvisioner)
    assert prov.packages == ("curl", "git")
    assert channel.commands == ["cat /etc/os-release"]


def test_detect_provisioner_unknown(driver, make_channel):
    channel = make_channel(responses={"cat /etc/os-release": "ID=alpine\n"})
    with pytest.raises(UnknownOsReleaseError):
        detect_provisioner(driver, channel)
