from webhandle.elements.mixins.interaction_mixin import InteractionMixin
from webhandle.elements.mixins.resource_mixin import ResourceMixin
from webhandle.elements.mixins.wait_mixin import WaitMixin

__all__ = ['InteractionMixin', 'ResourceMixin', 'WaitMixin']
