"""
Configuration settings for the fire alarm report renderer.
"""

import os

# Base directory
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Company identity printed in the sign-off captions and the footer disclaimer
COMPANY_NAME = os.getenv('FIREREPORT_COMPANY_NAME', 'Custom Electric & Communications, LLC')
COMPANY_SHORT = os.getenv('FIREREPORT_COMPANY_SHORT', 'CEC')

# Logo lookup: local folder first, then the public site over HTTP
LOGO_DIR = os.getenv('FIREREPORT_LOGO_DIR', os.path.join(os.getcwd(), 'public'))
LOGO_FILES = ('cec-logo.png', 'logo.png', 'cec-logo.jpg', 'logo.jpg')
SITE_URL = os.getenv('FIREREPORT_SITE_URL', '')
DEPLOY_HOST = os.getenv('FIREREPORT_DEPLOY_HOST', '')
LOCAL_URL = 'http://localhost:3000'
LOGO_TIMEOUT = float(os.getenv('FIREREPORT_LOGO_TIMEOUT', '5.0'))  # seconds per HTTP attempt

LOG_LEVEL = os.getenv('FIREREPORT_LOG_LEVEL', 'WARNING').upper()


def logo_base_urls():
    """Ordered base URLs for the HTTP logo fallback, empty entries dropped."""
    bases = [
        SITE_URL.rstrip('/'),
        f"https://{DEPLOY_HOST}" if DEPLOY_HOST else '',
        LOCAL_URL,
    ]
    return [b for b in bases if b]
