"""Tests for notification message composition."""

from __future__ import annotations

from http_post_notifier.core.build import BuildOutcome, BuildResult
from http_post_notifier.notifier.messages import (
    SERVICE_CODES,
    compose_failure_message,
    compose_message,
    compose_success_message,
    install_link,
    install_links,
)


class TestInstallLinks:
    """Tests for install link lines."""

    def test_ncs_test(self) -> None:
        """Test the NCS link for the test phase."""
        assert install_links("ncs", "test") == [
            "[NCS] https://ndeploy.navercorp.com/app/231/ios/test/recent"
        ]

    def test_works_stage(self) -> None:
        """Test the WORKS link for the stage phase."""
        assert install_links("works", "stage") == [
            "[WORKS] https://ndeploy.navercorp.com/app/189/ios/stage/recent"
        ]

    def test_all_emits_every_service(self) -> None:
        """Test that 'all' emits one line per known service."""
        links = install_links("all", "dev")

        assert links == [
            "[NCS] https://ndeploy.navercorp.com/app/231/ios/dev/recent",
            "[WORKS] https://ndeploy.navercorp.com/app/189/ios/dev/recent",
        ]
        assert len(links) == len(SERVICE_CODES)

    def test_unknown_service_placeholder(self) -> None:
        """Test that an unknown service yields one line naming it."""
        assert install_links("line", "dev") == ["Unknown serviceType: line"]

    def test_empty_service_placeholder(self) -> None:
        """Test that a missing service is reported, not raised."""
        assert install_links("", "dev") == ["Unknown serviceType: "]

    def test_service_case_insensitive(self) -> None:
        """Test that service names match regardless of case."""
        assert install_links(" NCS ", "real") == [install_link("ncs", "real")]


class TestFailureMessage:
    """Tests for the failed-build message."""

    def test_format(self, failed_build: BuildOutcome) -> None:
        """Test the job, number and URL layout."""
        assert compose_failure_message(failed_build) == (
            "Job failed: ios-app #42\nhttps://ci.example.com/job/ios-app/42/"
        )


class TestSuccessMessage:
    """Tests for the finished-build message."""

    def test_format(self, finished_build: BuildOutcome) -> None:
        """Test scheme, branch and install link layout."""
        assert compose_success_message(finished_build) == (
            "Build Finished.\n"
            " scheme: NCS-Debug, branch: develop\n"
            "[NCS] https://ndeploy.navercorp.com/app/231/ios/test/recent"
        )

    def test_all_services(self) -> None:
        """Test that both install lines follow the header."""
        outcome = BuildOutcome(
            job_name="ios-app",
            build_number=7,
            absolute_url="https://ci.example.com/job/ios-app/7/",
            variables={"phase": "dev", "scheme": "App", "branch": "main", "service": "all"},
        )

        lines = compose_success_message(outcome).split("\n")

        assert lines[0] == "Build Finished."
        assert lines[1] == " scheme: App, branch: main"
        assert lines[2:] == install_links("all", "dev")

    def test_missing_variables(self) -> None:
        """Test that absent variables render as empty strings."""
        outcome = BuildOutcome(
            job_name="ios-app",
            build_number=8,
            absolute_url="https://ci.example.com/job/ios-app/8/",
        )

        assert compose_success_message(outcome) == (
            "Build Finished.\n scheme: , branch: \nUnknown serviceType: "
        )


class TestComposeMessage:
    """Tests for message selection by result."""

    def test_failure_selects_failure_text(self, failed_build: BuildOutcome) -> None:
        """Test that failed builds get the failure text."""
        assert compose_message(failed_build).startswith("Job failed:")

    def test_success_selects_success_text(self, finished_build: BuildOutcome) -> None:
        """Test that successful builds get the finished text."""
        assert compose_message(finished_build).startswith("Build Finished.")

    def test_unstable_is_not_failure(self) -> None:
        """Test that unstable builds get the finished text."""
        outcome = BuildOutcome("ios-app", 9, "https://ci/9/", result=BuildResult.UNSTABLE)

        assert compose_message(outcome).startswith("Build Finished.")

    def test_aborted_is_failure(self) -> None:
        """Test that aborted builds are treated as failures."""
        outcome = BuildOutcome("ios-app", 10, "https://ci/10/", result=BuildResult.ABORTED)

        assert compose_message(outcome) == "Job failed: ios-app #10\nhttps://ci/10/"
