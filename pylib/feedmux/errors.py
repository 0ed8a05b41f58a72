'''Exceptions raised inside the pipeline. None of them escape a per-source task.'''


class FeedError(Exception):
    '''Base for feedmux errors.'''


class FeedParseError(FeedError):
    '''Raised when fetched content cannot be turned into posts.'''


class UnknownFeedFormat(FeedParseError):
    '''Content is neither Atom nor RSS.'''
