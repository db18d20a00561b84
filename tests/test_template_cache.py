import threading

import pytest

from ipfixoptsd_app.template_cache import (LRUTemplateCache,
    ScopedTemplateCache, TemplateStore, DEFAULT_CAPACITY)

def test_default_capacity():
    assert LRUTemplateCache().capacity == DEFAULT_CAPACITY == 10240

def test_bad_capacity():
    with pytest.raises( ValueError ):
        LRUTemplateCache( 0 )

def test_get_missing():
    assert LRUTemplateCache( 2 ).get( 256 ) == ( None, False )

def test_put_overwrites():
    c = LRUTemplateCache( 2 )
    c.put( 256, 'a' )
    c.put( 256, 'b' )
    assert c.get( 256 ) == ( 'b', True )
    assert len( c ) == 1

def test_least_recently_used_is_evicted():
    c = LRUTemplateCache( 2 )
    c.put( 256, 'a' )
    c.put( 257, 'b' )
    c.get( 256 )                    # 257 is now the oldest
    c.put( 258, 'c' )

    assert 257 not in c
    assert c.get( 256 ) == ( 'a', True )
    assert c.get( 258 ) == ( 'c', True )
    assert c.evictions == 1

def test_overwrite_does_not_evict():
    c = LRUTemplateCache( 2 )
    c.put( 256, 'a' )
    c.put( 257, 'b' )
    c.put( 256, 'a2' )
    assert len( c ) == 2
    assert c.evictions == 0

def test_clear():
    c = LRUTemplateCache( 2 )
    c.put( 256, 'a' )
    c.clear()
    assert len( c ) == 0

def test_keys():
    exporter = ( '192.0.2.1', 4739 )
    assert LRUTemplateCache().key( exporter, 8, 512 ) == 512
    assert ScopedTemplateCache().key( exporter, 8, 512 ) == (
        exporter, 8, 512 )

def test_interface_is_abstract():
    s = TemplateStore()
    with pytest.raises( NotImplementedError ):
        s.get( 1 )
    with pytest.raises( NotImplementedError ):
        s.put( 1, 'a' )

def test_concurrent_access():
    c = LRUTemplateCache( 64 )
    errors = []

    def worker( n ):
        try:
            for i in range( 2000 ):
                key = 256 + ( ( n * 7 + i ) % 128 )
                c.put( key, ( n, i ) )
                ( template, found ) = c.get( key )
                if found and not isinstance( template, tuple ):
                    errors.append( template )
        except Exception as e:
            errors.append( e )

    threads = [ threading.Thread( target=worker, args=( n, ) )
                    for n in range( 8 ) ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len( c ) == 64
