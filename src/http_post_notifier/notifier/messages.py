"""Notification message text for finished builds.

Two messages exist, selected by the build result:

- failure: job name, build number and the build URL
- success: scheme and branch from the build variables, followed by install
  links for the service(s) the build was produced for

Install links point at the deployment portal's "most recent build" page for
an app code and phase. The service name maps to an app code through a fixed
table; ``all`` expands to every known service.

Example:
    >>> install_links("ncs", "test")
    ['[NCS] https://ndeploy.navercorp.com/app/231/ios/test/recent']
    >>> install_links("line", "dev")
    ['Unknown serviceType: line']
"""

from __future__ import annotations

from http_post_notifier.core.build import BuildOutcome

INSTALL_URL_TEMPLATE = "https://ndeploy.navercorp.com/app/{code}/ios/{phase}/recent"

# Known services and their deployment-portal app codes, in output order
SERVICE_CODES: dict[str, int] = {
    "ncs": 231,
    "works": 189,
}

ALL_SERVICES = "all"

# Build variable names read for the success message
VAR_PHASE = "phase"
VAR_SCHEME = "scheme"
VAR_BRANCH = "branch"
VAR_SERVICE = "service"


def install_link(service: str, phase: str) -> str:
    """Format the install line for a known service.

    Raises:
        KeyError: If ``service`` is not in ``SERVICE_CODES``.
    """
    code = SERVICE_CODES[service]
    url = INSTALL_URL_TEMPLATE.format(code=code, phase=phase)
    return f"[{service.upper()}] {url}"


def install_links(service: str, phase: str) -> list[str]:
    """Install lines for a service name, ``all``, or an unknown name.

    Unknown names produce a single placeholder line rather than an error.
    """
    key = service.strip().lower()
    if key == ALL_SERVICES:
        return [install_link(name, phase) for name in SERVICE_CODES]
    if key in SERVICE_CODES:
        return [install_link(key, phase)]
    return [f"Unknown serviceType: {service}"]


def compose_failure_message(outcome: BuildOutcome) -> str:
    """Failure text: ``Job failed: {job} #{number}`` and the build URL."""
    return f"Job failed: {outcome.display_name}\n{outcome.absolute_url}"


def compose_success_message(outcome: BuildOutcome) -> str:
    """Success text with scheme, branch and install links."""
    phase = outcome.variable(VAR_PHASE)
    scheme = outcome.variable(VAR_SCHEME)
    branch = outcome.variable(VAR_BRANCH)
    service = outcome.variable(VAR_SERVICE)

    links = "\n".join(install_links(service, phase))
    return f"Build Finished.\n scheme: {scheme}, branch: {branch}\n{links}"


def compose_message(outcome: BuildOutcome) -> str:
    """Pick the failure or success text for a build."""
    if outcome.failed:
        return compose_failure_message(outcome)
    return compose_success_message(outcome)


__all__ = [
    "ALL_SERVICES",
    "INSTALL_URL_TEMPLATE",
    "SERVICE_CODES",
    "compose_failure_message",
    "compose_message",
    "compose_success_message",
    "install_link",
    "install_links",
]
