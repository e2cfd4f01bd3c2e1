"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers shared by the UI fixtures and browser sessions, plus report
generation used by the test runner.

Features:
- Text / screenshot attachment helpers
- HTML report generation via the Allure CLI

================================================================================
"""

import subprocess
from pathlib import Path
from typing import Union

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_screenshot(source: Union[bytes, str, Path], name: str = "Screenshot"):
    """
    Attach a PNG screenshot to Allure report.

    Args:
        source: Raw PNG bytes or path to a PNG file
        name: Attachment name
    """
    if isinstance(source, bytes):
        allure.attach(
            source,
            name=name,
            attachment_type=allure.attachment_type.PNG
        )
    else:
        allure.attach.file(
            str(source),
            name=name,
            attachment_type=allure.attachment_type.PNG
        )


# ================================================================================
# Report Generation
# ================================================================================

def generate_allure_report(
    results_dir: Union[str, Path],
    report_dir: Union[str, Path],
    clean: bool = True
) -> bool:
    """
    Generate an HTML report from Allure results.

    Args:
        results_dir: Directory holding allure-results
        report_dir: Output directory for the HTML report
        clean: Remove previous report contents

    Returns:
        True if the report was generated
    """
    cmd = ["allure", "generate", str(results_dir), "-o", str(report_dir)]
    if clean:
        cmd.append("--clean")

    try:
        subprocess.run(cmd, check=True)
    except FileNotFoundError:
        logger.warning("Allure CLI not found. Please install Allure to generate reports.")
        return False
    except subprocess.CalledProcessError as e:
        logger.error(f"Failed to generate Allure report: {e}")
        return False

    logger.info(f"Report generated: {report_dir}")
    return True


__all__ = [
    "attach_text",
    "attach_screenshot",
    "generate_allure_report",
]
