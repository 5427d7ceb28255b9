class IdentifierIssuer(object):
    """
    Issues blank node labels for a single parse, so that graphs parsed
    separately and then merged never share a label by accident.
    """

    def __init__(self, prefix):
        """
        Initializes a new IdentifierIssuer.

        :param prefix: the prefix to use ('<prefix><counter>').
        """
        self.prefix = prefix
        self.counter = 0
        self.existing = {}

    def get_id(self, old=None):
        """
        Gets the label issued for an old label, issuing a new one if the
        old label has not been seen yet (or if no old label is given).

        :param [old]: the old label.

        :return: the new label.
        """
        if old is not None and old in self.existing:
            return self.existing[old]

        id_ = self.prefix + str(self.counter)
        self.counter += 1

        if old is not None:
            self.existing[old] = id_
        return id_

    def has_id(self, old):
        """
        Returns True if the given old label has already been assigned a
        new label.

        :param old: the old label.

        :return: True if the old label has been assigned a new label.
        """
        return old in self.existing


def issuer_for(index):
    """Return a fresh blank node issuer for the index-th parsed object."""
    return IdentifierIssuer('_:o%db' % index)
