"""
Browser trigger for the sync commands.

A single form, protected by HTTP basic auth against WEB_USERNAME and
WEB_PASSWORD, that runs a sync command in-process and shows everything it
printed and logged.
"""
import base64
import binascii
import logging
import secrets
from io import StringIO

from django.conf import settings
from django.core.management import call_command
from django.http import HttpResponse
from django.shortcuts import render
from django.views.decorators.http import require_http_methods

from clubsync.sync_utils import yesterday

# Form action -> management command; events also take the date range
ACTIONS = {
    'fetch_events': 'sync_events',
    'fetch_members': 'sync_members',
    'fetch_calendars': 'sync_calendars',
}

SYNC_LOGGERS = ('easyverein', 'calendars', 'events', 'members')

REALM = 'Event Fetcher Access'


def _basic_auth_credentials(request):
    """(username, password) from the Authorization header, or None."""
    header = request.META.get('HTTP_AUTHORIZATION', '')
    scheme, _, encoded = header.partition(' ')
    if scheme.lower() != 'basic' or not encoded:
        return None
    try:
        decoded = base64.b64decode(encoded.strip()).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, separator, password = decoded.partition(':')
    if not separator:
        return None
    return username, password


def _is_authorized(request):
    credentials = _basic_auth_credentials(request)
    if credentials is None:
        return False
    username, password = credentials
    # Evaluate both so timing doesn't reveal which one was wrong
    username_ok = secrets.compare_digest(username.encode(), settings.WEB_USERNAME.encode())
    password_ok = secrets.compare_digest(password.encode(), settings.WEB_PASSWORD.encode())
    return username_ok and password_ok


def run_command_capturing_output(name, *args):
    """Run a management command and return its output and the sync log lines."""
    buffer = StringIO()
    handler = logging.StreamHandler(buffer)
    handler.setFormatter(logging.Formatter('%(levelname)s %(message)s'))
    loggers = [logging.getLogger(logger_name) for logger_name in SYNC_LOGGERS]
    for logger in loggers:
        logger.addHandler(handler)

    try:
        call_command(name, *args, stdout=buffer, stderr=buffer, no_color=True)
    except Exception as e:
        buffer.write(f'Error: {e}\n')
    finally:
        for logger in loggers:
            logger.removeHandler(handler)

    return buffer.getvalue()


@require_http_methods(["GET", "POST"])
def sync_trigger(request):
    """
    Show the trigger form; on POST run the chosen sync and show its output.
    """
    if not settings.WEB_USERNAME or not settings.WEB_PASSWORD:
        return HttpResponse('Web access credentials not configured', status=503)

    if not _is_authorized(request):
        response = HttpResponse('Access denied', status=401)
        response['WWW-Authenticate'] = f'Basic realm="{REALM}"'
        return response

    default_date = yesterday().isoformat()
    output = None

    if request.method == 'POST':
        action = request.POST.get('action', '')
        start_date = request.POST.get('start_date') or default_date
        end_date = request.POST.get('end_date') or start_date

        if action == 'fetch_events':
            output = run_command_capturing_output(ACTIONS[action], start_date, end_date)
        elif action in ACTIONS:
            output = run_command_capturing_output(ACTIONS[action])
        else:
            output = 'Invalid action'

    return render(request, 'sync/trigger.html', {
        'output': output,
        'default_date': default_date,
    })
