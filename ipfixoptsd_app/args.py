"""
Command line processing.  There is no configuration file; everything
the daemon needs comes from here.
"""

import argparse

from ipfixoptsd_app.ipfixoptsd_log import log
from ipfixoptsd_app.template_cache import DEFAULT_CAPACITY

DEFAULT_PIDFILE = '/var/run/ipfixoptsd.pid'

class ParsePorts( argparse.Action ):

    """
    Accepts one or more comma separated UDP ports.  May be given more
    than once; the ports accumulate.
    """

    def __init__( self, option_strings, dest, nargs=None, **kwargs ):
        if nargs is not None:
            raise ValueError( 'nargs not allowed' )
        argparse.Action.__init__( self, option_strings, dest, **kwargs )

    def __call__( self, parser, namespace, values, option_string=None ):

        ports = list( getattr( namespace, self.dest, None ) or [] )

        for v in values.split( ',' ):
            try:
                port = int( v )
            except ValueError:
                parser.error( 'port must be a number: %s' % v )
            if port < 1 or port > 65535:
                parser.error( 'port must be in the range 1-65535: %d' % port )
            if port not in ports:
                ports.append( port )

        setattr( namespace, self.dest, ports )

def _cache_size( v ):

    n = int( v )
    if n < 1:
        raise argparse.ArgumentTypeError( 'cache size must be at least 1' )
    return( n )

def parse_args( argv=None ):

    """
    Parse the arguments.

    Args:
        argv: Argument list, or None for sys.argv.

    Returns:
        An argparse.Namespace.
    """

    p = argparse.ArgumentParser( description =
        "Daemon that reads IPFIX options templates and options data "
        "from exporters and logs the decoded exporter options." )

    p.add_argument( '--ports', '-p',
        required=True,
        metavar='port[,port...]',
        action=ParsePorts,
        help='UDP port(s) to listen on.  May be given more than once.' )

    p.add_argument( '--nofork', '-f',
        action='store_true',
        help='Does not fork a daemon process.  Program runs in foreground.')

    p.add_argument( '--user',
        help='The user to run the daemon as.  Must be started as root '
            'and as a daemon.' )

    p.add_argument( '--group',
        help='The group to run the daemon as.  Must be start as root '
            'and as a daemon.' )

    p.add_argument( '--pidfile',
        default=DEFAULT_PIDFILE,
        help='Where the daemon writes its pid.  Default: %(default)s' )

    p.add_argument( '--log',
        action='store_true',
        help = 'Also log to syslog, facility local1.' )

    p.add_argument( '--verbose', '-v',
        action='count',
        default=0,
        help="Turns on verbose output.  Twice for decode detail." )

    p.add_argument( '--cache-size',
        type=_cache_size,
        default=DEFAULT_CAPACITY,
        help='Number of options templates kept.  Default: %(default)d' )

    p.add_argument( '--scope-templates',
        action='store_true',
        help='Key templates by exporter, observation domain and '
            'template id instead of template id alone.' )

    p.add_argument( '--fix-system-init-time',
        action='store_true',
        help='Report systemInitTimeMilliseconds under its own name '
            'instead of exportingProcessId.' )

    cmdparse = p.parse_args( argv )

    log().debug( 'DEBUG: arguments: %s' % cmdparse )

    return( cmdparse )

# End.
