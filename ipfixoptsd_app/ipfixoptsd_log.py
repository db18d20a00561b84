"""
This module contains the routine that sets up logging and a
routine that provides the current logging object.

log() is usable before set_logging() is called.  Until then, messages
go wherever the root logger sends them, which is nowhere unless the
embedding program configured it.  The decoders never depend on
logging being set up.
"""

import logging
import logging.handlers

#
# _theconsole and _thesyslog handlers are kept accessable so we
# can modify them as needed, or remove them.
#

_thelog = logging.getLogger( 'ipfixoptsd_app' )
_theconsole = None
_thesyslog = None

def log():
    """
    This routine returns the current log object.

    Returns:
        A logging.Logger.
    """

    return( _thelog )

def set_logging( cmdparse ):

    """
    Sets up logging handlers on the object returned by log().

    Args:
        cmdparse    -- The results of argument processing, or None
                       for basic stderr logging.  Attribute log
                       turns on syslog logging and verbose controls
                       the console level: once for INFO, twice or
                       more for DEBUG.

    Returns
        None
    """

    global _theconsole
    global _thesyslog

    if getattr( cmdparse, 'log', None ):
        if not _thesyslog:
            _thesyslog = logging.handlers.SysLogHandler(
                address = '/dev/log',
                facility = logging.handlers.SysLogHandler.LOG_LOCAL1
            )

            syslog_format = logging.Formatter(
                fmt = '%(processName)s[%(process)d] %(message)s' )
            _thesyslog.setFormatter( syslog_format )

        _thesyslog.setLevel( logging.INFO )
        _thelog.addHandler( _thesyslog )
    elif _thesyslog:
        _thelog.removeHandler( _thesyslog )
        _thesyslog = None

    if not _theconsole:
        _theconsole = logging.StreamHandler()
        _thelog.addHandler( _theconsole )

    verbose = getattr( cmdparse, 'verbose', None ) or 0
    if verbose > 1:
        _theconsole.setLevel( logging.DEBUG )
        _thelog.setLevel( logging.DEBUG )
    elif verbose:
        _theconsole.setLevel( logging.INFO )
        _thelog.setLevel( logging.INFO )
    else:
        _theconsole.setLevel( logging.WARN )
        _thelog.setLevel( logging.INFO )

# End.
