"""Tests for the FoxService data model."""

from __future__ import annotations

import pytest

from fox_operator.exceptions import InputError
from fox_operator.models import ContainerSpec, FoxService, FoxServiceSpec, IngressPort, ReconcileResult


class TestContainerSpec:
    """Test cases for ContainerSpec parsing."""

    def test_minimal_container(self):
        """Test that only name and image are required."""
        container = ContainerSpec.from_dict({"name": "web", "image": "nginx:1.25"})
        assert container.name == "web"
        assert container.image == "nginx:1.25"
        assert container.args is None
        assert container.env is None
        assert container.ports is None

    def test_port_keys_are_converted_to_integers(self):
        """Test that host ports given as JSON object keys become integers."""
        container = ContainerSpec.from_dict(
            {"name": "web", "image": "nginx", "ports": {"8080": 80, "8443": 443}}
        )
        assert container.ports == {8080: 80, 8443: 443}

    def test_env_and_args_are_copied(self):
        """Test that env and args are carried over."""
        container = ContainerSpec.from_dict(
            {"name": "web", "image": "nginx", "args": ["-v"], "env": {"A": "1"}}
        )
        assert container.args == ["-v"]
        assert container.env == {"A": "1"}

    @pytest.mark.parametrize("data", [{"name": "web"}, {"image": "nginx"}, {}])
    def test_missing_name_or_image(self, data):
        """Test that a container without name or image is rejected."""
        with pytest.raises(InputError):
            ContainerSpec.from_dict(data)

    def test_non_integer_port(self):
        """Test that a non-numeric port is rejected."""
        with pytest.raises(InputError, match="non-integer port"):
            ContainerSpec.from_dict({"name": "web", "image": "nginx", "ports": {"http": 80}})


class TestFoxServiceSpec:
    """Test cases for FoxServiceSpec parsing."""

    def test_http_ingress(self):
        """Test that httpIngress entries are parsed into ports."""
        spec = FoxServiceSpec.from_dict(
            {
                "replicas": 2,
                "containers": [{"name": "web", "image": "nginx"}],
                "httpIngress": [{"port": 80}, {"port": 443}],
            }
        )
        assert spec.replicas == 2
        assert spec.http_ingress == [IngressPort(80), IngressPort(443)]

    def test_http_ingress_absent(self):
        """Test that a missing httpIngress stays None."""
        spec = FoxServiceSpec.from_dict({"replicas": 1, "containers": []})
        assert spec.http_ingress is None

    def test_replicas_passed_through(self):
        """Test that negative replicas are not validated."""
        spec = FoxServiceSpec.from_dict({"replicas": -1, "containers": []})
        assert spec.replicas == -1

    def test_ingress_without_port(self):
        """Test that an ingress entry without port is rejected."""
        with pytest.raises(InputError, match="malformed spec"):
            FoxServiceSpec.from_dict({"replicas": 1, "httpIngress": [{}]})


class TestFoxService:
    """Test cases for FoxService.from_body."""

    def test_from_body(self, fox_body):
        """Test that metadata and spec are parsed."""
        resource = FoxService.from_body(fox_body(finalizers=["a"], http_ingress=[{"port": 80}]))
        assert resource.name == "echo"
        assert resource.namespace == "default"
        assert resource.uid == "echo-uid"
        assert resource.generation == 1
        assert resource.lifecycle.finalizers == ("a",)
        assert not resource.lifecycle.is_deleting
        assert resource.spec.containers[0].name == "web"

    def test_deletion_timestamp(self, fox_body):
        """Test that a deletion timestamp marks the resource as deleting."""
        resource = FoxService.from_body(fox_body(deletion_timestamp="2024-01-01T00:00:00Z"))
        assert resource.lifecycle.is_deleting

    def test_without_namespace(self, fox_body):
        """Test that a missing namespace parses to None."""
        resource = FoxService.from_body(fox_body(namespace=None))
        assert resource.namespace is None

    def test_missing_name(self, fox_body):
        """Test that a body without name is rejected."""
        body = fox_body()
        del body["metadata"]["name"]
        with pytest.raises(InputError, match="metadata.name"):
            FoxService.from_body(body)

    def test_meta(self, fox_body):
        """Test the metadata view used for logging."""
        resource = FoxService.from_body(fox_body())
        assert resource.meta == {
            "name": "echo",
            "namespace": "default",
            "uid": "echo-uid",
            "generation": 1,
        }


def test_reconcile_result_defaults():
    """Test that a bare result means no requeue."""
    result = ReconcileResult()
    assert result.requeue_after is None
    assert result.action is None
    assert result.recreated == ()
