'''Charset negotiation for fetched feed bodies.'''

import codecs

import structlog

logger = structlog.get_logger()

DEFAULT_CHARSET = 'utf-8'


def charset_from_content_type(content_type: str | None) -> str:
    '''
    Pick the charset named by a Content-Type header's charset= parameter.
    Falls back to UTF-8 when the header is absent, has no charset, or names
    a codec Python does not know or one that is not a text encoding.
    '''
    if not content_type:
        return DEFAULT_CHARSET
    for param in content_type.split(';'):
        param = param.strip()
        if param.lower().startswith('charset='):
            name = param[len('charset='):].strip().strip('"\'')
            try:
                info = codecs.lookup(name)
            except LookupError:
                logger.warning('unsupported charset, defaulting to utf-8', charset=name)
                break
            # base64, rot13, zlib and friends are registered codecs but not text encodings
            if getattr(info, '_is_text_encoding', True):
                return info.name
            logger.warning('charset is not a text encoding, defaulting to utf-8', charset=name)
            break
    return DEFAULT_CHARSET


def decode_body(body: bytes, charset: str) -> str:
    '''Decode the full response body; undecodable bytes become U+FFFD.'''
    return body.decode(charset, errors='replace')
