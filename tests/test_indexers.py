import pytest

from hmcapi.indexers import (
    FieldIndexer,
    extract_release_version,
    extract_template_name,
    setup_indexers,
)
from hmcapi.managedcluster import ManagedCluster, ManagedClusterSpec
from hmcapi.management import Management
from hmcapi.meta import TEMPLATE_KEY, VERSION_KEY
from hmcapi.release import Release, ReleaseSpec


def test_extract_template_name():
    cluster = ManagedCluster(spec=ManagedClusterSpec(template="aws-standalone-cp"))
    assert extract_template_name(cluster) == ["aws-standalone-cp"]
    assert extract_template_name(Release()) is None


def test_extract_release_version():
    release = Release(spec=ReleaseSpec(version="0.0.1"))
    assert extract_release_version(release) == ["0.0.1"]
    assert extract_release_version(Management()) is None


def test_setup_indexers_matches():
    indexer = FieldIndexer()
    setup_indexers(indexer)
    cluster = ManagedCluster(spec=ManagedClusterSpec(template="tmpl"))
    release = Release(spec=ReleaseSpec(version="0.0.2"))
    assert indexer.matches(cluster, TEMPLATE_KEY, "tmpl") is True
    assert indexer.matches(cluster, TEMPLATE_KEY, "other") is False
    assert indexer.matches(release, VERSION_KEY, "0.0.2") is True


def test_setup_indexers_twice_conflicts():
    indexer = FieldIndexer()
    setup_indexers(indexer)
    with pytest.raises(ValueError):
        setup_indexers(indexer)


def test_matches_unindexed_field():
    indexer = FieldIndexer()
    setup_indexers(indexer)
    with pytest.raises(KeyError):
        indexer.matches(Management(), TEMPLATE_KEY, "x")


def test_extractor_returning_none_never_matches():
    indexer = FieldIndexer()
    indexer.index_field(Management, TEMPLATE_KEY, extract_template_name)
    assert indexer.matches(Management(), TEMPLATE_KEY, "") is False