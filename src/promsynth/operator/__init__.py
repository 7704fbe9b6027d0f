"""Prometheus Operator custom resources and core Kubernetes objects."""

from promsynth.operator.alertmanagerconfig import (
    AlertmanagerConfig,
    AlertmanagerConfigSpec,
    OperatorEmailConfig,
    OperatorInhibitRule,
    OperatorOpsGenieConfig,
    OperatorPagerDutyConfig,
    OperatorReceiver,
    OperatorSlackConfig,
    OperatorWebhookConfig,
    from_alertmanager,
)
from promsynth.operator.configmap import ConfigMap, KubernetesSecret, dashboard_configmap
from promsynth.operator.meta import (
    BasicAuth,
    ConfigMapKeySelector,
    HTTPConfig,
    KubernetesObject,
    LabelSelector,
    LabelSelectorRequirement,
    NamespaceSelector,
    ObjectMeta,
    SafeTLSConfig,
    SecretKeySelector,
    SecretOrConfigMap,
)
from promsynth.operator.monitors import (
    Endpoint,
    PodMetricsEndpoint,
    PodMonitor,
    PodMonitorSpec,
    ServiceMonitor,
    ServiceMonitorSpec,
)
from promsynth.operator.prometheusrule import PrometheusRule, PrometheusRuleSpec

__all__ = [
    "AlertmanagerConfig",
    "AlertmanagerConfigSpec",
    "BasicAuth",
    "ConfigMap",
    "ConfigMapKeySelector",
    "Endpoint",
    "HTTPConfig",
    "KubernetesObject",
    "KubernetesSecret",
    "LabelSelector",
    "LabelSelectorRequirement",
    "NamespaceSelector",
    "ObjectMeta",
    "OperatorEmailConfig",
    "OperatorInhibitRule",
    "OperatorOpsGenieConfig",
    "OperatorPagerDutyConfig",
    "OperatorReceiver",
    "OperatorSlackConfig",
    "OperatorWebhookConfig",
    "PodMetricsEndpoint",
    "PodMonitor",
    "PodMonitorSpec",
    "PrometheusRule",
    "PrometheusRuleSpec",
    "SafeTLSConfig",
    "SecretKeySelector",
    "SecretOrConfigMap",
    "ServiceMonitor",
    "ServiceMonitorSpec",
    "dashboard_configmap",
    "from_alertmanager",
]
