# hmcapi

A Python data model for a Kubernetes cluster-management layer: managed
clusters, the management object, releases, cluster/service/provider
templates, template chains and template-management access rules. Every
resource is a dataclass with `to_dict()` / `from_dict()` for its stored
form, plus the defaults, status conditions, validation rules and field
indexers that go with it.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `hmcapi.meta`: the API group version (`GroupVersion`, `GROUP_VERSION`),
  `ObjectMeta`, `Condition` and `ConditionStatus`, the condition helpers
  `set_status_condition`, `find_status_condition` and
  `is_status_condition_true`, `Providers`, `parse_config` (JSON or YAML text,
  bytes or a dict into a mapping of Helm values) and `Scheme`, the registry
  of kinds (`SCHEME`) that each resource module registers its classes in.
- `hmcapi.templates`: `HelmSpec` (with `validate()`), `TemplateSpecCommon`,
  `TemplateStatusCommon`, `TemplateValidationStatus`,
  `CrossNamespaceSourceReference`, the kinds `ClusterTemplate`,
  `ServiceTemplate` and `ProviderTemplate`, and the chains
  `ClusterTemplateChain` and `ServiceTemplateChain` built from
  `TemplateChainSpec`, `SupportedTemplate` and `AvailableUpgrade`.
- `hmcapi.managedcluster`: `ManagedCluster` with `helm_values()` and
  `init_conditions()`; `ManagedClusterSpec.validate()`.
- `hmcapi.management`: `Management`, `ManagementSpec.set_providers_defaults()`,
  `Core`, `Component.helm_values()`, `Provider`, `ComponentStatus`.
- `hmcapi.release`: `Release` with `provider_template(name)`.
- `hmcapi.templatemanagement`: `TemplateManagement`, `AccessRule`,
  `TargetNamespaces.validate()`, `LabelSelector`.
- `hmcapi.indexers`: `FieldIndexer`, `setup_indexers`,
  `extract_template_name`, `extract_release_version`.

## Example

```python
from hmcapi.managedcluster import ManagedCluster, ManagedClusterSpec
from hmcapi.meta import ObjectMeta

cluster = ManagedCluster(
    metadata=ObjectMeta(name="dev", namespace="default"),
    spec=ManagedClusterSpec(template="aws-standalone-cp", config='{"region": "us-east-2"}'),
)
cluster.init_conditions()
print(cluster.helm_values())          # {'region': 'us-east-2'}
print([c.type for c in cluster.status.conditions])
# ['TemplateReady', 'HelmChartReady', 'HelmReleaseReady', 'Ready']
```

Looking objects up by an indexed field:

```python
from hmcapi.indexers import FieldIndexer, setup_indexers
from hmcapi.meta import TEMPLATE_KEY

indexer = FieldIndexer()
setup_indexers(indexer)
print(indexer.matches(cluster, TEMPLATE_KEY, "aws-standalone-cp"))  # True
```

## Validation

Validation problems are raised as `ValueError`:

- a `HelmSpec` must set exactly one of `chart_name` or `chart_ref`;
- a template's or template chain's spec cannot change: `validate_update(old)`
  raises when the specs differ;
- a `ManagedClusterSpec` must name a template;
- `TargetNamespaces` may use at most one of a string selector, a structured
  selector or a list of names;
- a config that is not a mapping is rejected by `parse_config`.

## What it does not do

This package is the data model only. It does not talk to a Kubernetes API
server, run reconciliation controllers or admission webhooks, install Helm
charts, or provide a command-line tool; `FieldIndexer` matches objects you
pass to it and keeps no store of its own.