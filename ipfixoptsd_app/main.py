"""
This is the main module for ipfixoptsd.  It processes the arguments,
creates the threads and waits for a signal.

This program responds to:

    SIGUSR1: Log a status report
    SIGHUP, SIGINT: Graceful shutdown
    SIGTERM: Empties the queues and then shuts down

There are two threads per port.  A Socket thread reads datagrams and
queues them.  A Packet thread takes them off the queue and decodes
them.  Every Packet thread uses the same template store, so a
template that arrives on one port can be used for data arriving on
another unless --scope-templates is given.
"""

import sys
import pwd
import grp
import time
import socket
import signal
import traceback

import daemon
import pidfile

import ipfixoptsd_app.args
import ipfixoptsd_app.sockets
import ipfixoptsd_app.packet
import ipfixoptsd_app.ipfixoptsd_log
import ipfixoptsd_app.template_cache
from ipfixoptsd_app.ipfix import make_registry
from ipfixoptsd_app.ipfixoptsd_log import log
from ipfixoptsd_app.util import set_exit, get_exit

IPFIXOPTSD_MAJOR = 1
IPFIXOPTSD_MINOR = 0
IPFIXOPTSD_PATCH = 0

VERSION = '%d.%02d.%02d' % (
    IPFIXOPTSD_MAJOR, IPFIXOPTSD_MINOR, IPFIXOPTSD_PATCH )

sockets = []
packets = []
all_threads = []
templates = None

def main( argv=None ):

    """
    Main routine.  Call the option parser, and then start the
    various threads.  Set the signal handlers and sleep.

    We trap the exit exception, if bad, so it can be logged to
    a syslog, etc.
    """

    ipfixoptsd_app.ipfixoptsd_log.set_logging( None )   # Basic stderr logging
    cmdparse = ipfixoptsd_app.args.parse_args( argv )

    if cmdparse.nofork:
        _main( cmdparse )
        return

    daemon_args = {}
    daemon_args[ 'umask' ] = 0o027
    daemon_args[ 'prevent_core' ] = True
    daemon_args[ 'pidfile' ] = pidfile.PidFile( cmdparse.pidfile )

    if cmdparse.user:
        daemon_args[ 'uid' ] = pwd.getpwnam( cmdparse.user ).pw_uid
    if cmdparse.group:
        daemon_args[ 'gid' ] = grp.getgrnam( cmdparse.group ).gr_gid

    with daemon.DaemonContext( **daemon_args ):
        try:
            _main( cmdparse )
        except SystemExit:
            pass
        except Exception:
            f = traceback.format_exception( *sys.exc_info() )
            for x in f: log().error( x )
            log().error( 'Daemon aborted.' )
            set_exit( 1 )
            raise
    sys.exit( get_exit() )

def make_templates( cmdparse ):

    """
    Builds the template store asked for on the command line.
    """

    if cmdparse.scope_templates:
        cls = ipfixoptsd_app.template_cache.ScopedTemplateCache
    else:
        cls = ipfixoptsd_app.template_cache.LRUTemplateCache

    return( cls( cmdparse.cache_size ) )

def _main( cmdparse ):

    """
    This is the main code that runs after we decide to fork as a
    daemon or not.  Does not matter to this code.
    """

    global templates

    ipfixoptsd_app.ipfixoptsd_log.set_logging( cmdparse )

    log().info( 'INFO: IPFixOptsd Version: %s' % VERSION )

    signal.signal( signal.SIGUSR1, usr1_handler )   # Set info request
    signal.signal( signal.SIGHUP, hup_handler )     # Graceful shutdown
    signal.signal( signal.SIGINT, hup_handler )     # Graceful shutdown
    signal.signal( signal.SIGTERM, term_handler )   # Fast shutdown

    templates = make_templates( cmdparse )
    registry = make_registry(
        legacy_system_init_time=not cmdparse.fix_system_init_time )

    log().info( 'INFO: template store %s, capacity %d' %
        ( type( templates ).__name__, templates.capacity ) )

    for p in cmdparse.ports:
        s = ipfixoptsd_app.sockets.Socket( p )
        s.start()
        sockets.append( s )
        all_threads.append( s )

        packet = ipfixoptsd_app.packet.Packet( s, templates, registry,
            s.name )
        packet.start()
        packets.append( packet )
        all_threads.append( packet )

        log().info( 'INFO: Port %d is sending to thread "%s"' %
            ( p, packet.name ) )

#
# Let's check for startup errors.
#

    time.sleep( 5 )
    for s in sockets:
        if s.should_stop():
            hup_handler( None, None )

    while True:
        time.sleep( 24*60*60 )      # Now, main thread responds to signals

def usr1_handler( signum, frame ):

    """
    This handler logs the thread states.

    Returns:
        True: Some threads still live
        False: All threads dead
    """

    any_alive = False

    for t in all_threads:
        if t.is_alive():
            any_alive = True

        if signum == signal.SIGHUP or signum == signal.SIGTERM:
            if not t.is_alive() and not t.do_we_know_it_stopped():
                log().info( 'INFO: Thread Name: %s has stopped.' % ( t.name ) )
                t.know_it_stopped()
            continue
        elif not t.is_alive():
            log().error( 'ERROR: Thread Name: %s is NOT alive.' % ( t.name ) )
        else:
            ( z, m ) = t.qsize()
            log().info( 'INFO: Thread name: %s is alive, '
                'queue cnt/max: %d/%d' % ( t.name, z, m ) )
            try:
                t.print_metrics()
            except AttributeError:
                pass

    if templates is not None and signum == signal.SIGUSR1:
        log().info( 'INFO: templates cached: %d, evicted: %d' %
            ( len( templates ), templates.evictions ) )

    return( any_alive )

def hup_handler( signum, frame ):

    """
    This handler needs to convince the threads to stop, insure
    that they did, and then exit.
    """

    log().info( "INFO: It's my time to be going!" )

    for t in all_threads:
        t.stop()        # Tell all threads we want to stop

    for s in sockets:
        if not s.is_alive():
            log().error( 'ERROR: Thread %s is already dead.' % s.name )
            s.queue().put( [ ('0.0.0.0', 0), s.port, b'', 0 ] )
            continue

#
# Send a 0 length packet to each server socket.  This wakes the socket
# thread, which passes the 0 length packet on to its packet thread.
#

        ws = socket.socket( socket.AF_INET, socket.SOCK_DGRAM )
        ws.sendto( b'', ('localhost', s.port ) )
        ws.close()

    while usr1_handler( signal.SIGHUP, None ):
        time.sleep( 2 )

    log().info( 'INFO: All threads have stopped.  Shutdown complete.' )

    sys.exit( get_exit() )

def term_handler( signum, frame ):

    """
    This is a faster termination.  It clears the socket queues and
    then calls the standard hup handler.
    """

    log().info( 'INFO: Fast stop, clearing all queues.' )

    for s in sockets:
        s.qempty()

    hup_handler( signum, frame )

if __name__ == '__main__':
    main()

# End.
