"""Boutique mockup prompt construction."""

from typing import Optional, Union

from ..models.enums import ProductType


DESIGN_PRESERVATION_CLAUSE = (
    " The design on the product must remain exactly as shown in the reference image"
    " - do not alter, modify, or change the design in any way."
    " The design should be clearly visible and prominent."
    " Remember it will be used as the sales image for the product."
)

GENERIC_PRODUCT_NAME = "product"

PRODUCT_NAMES = {
    ProductType.HOODIE: "hoodie",
    ProductType.FACECAP: "face cap or baseball cap",
    ProductType.SHIRT: "t-shirt or shirt",
    ProductType.MUG: "ceramic mug",
    ProductType.STICKER_PAD: "sticker pad or notepad",
    ProductType.TANK_TOP: "tank top",
    ProductType.LONG_SLEEVE: "long sleeve shirt",
    ProductType.SWEATSHIRT: "sweatshirt",
    ProductType.JACKET: "jacket",
    ProductType.TOTE_BAG: "tote bag",
}

HANGING_CLOTHING = frozenset({
    ProductType.HOODIE,
    ProductType.SHIRT,
    ProductType.TANK_TOP,
    ProductType.LONG_SLEEVE,
    ProductType.SWEATSHIRT,
    ProductType.JACKET,
})


def _as_product_type(product_type):
    try:
        return ProductType(product_type)
    except ValueError:
        return product_type


class PromptBuilder:
    """Builds image generation prompts that stage a product as a boutique mockup."""

    @classmethod
    def build_prompt(
        cls,
        product_type: Union[ProductType, str],
        color: Optional[str] = None,
        preserve_design: bool = True,
    ) -> str:
        """
        Build the generation prompt for a product.

        Args:
            product_type: Product category; unknown values get the generic template
            color: Optional colour (name, hex or RGB) the product should have
            preserve_design: Forbid the model from touching the printed design

        Returns:
            Multi-paragraph prompt text
        """
        product_type = _as_product_type(product_type)
        color_description = f" in {color} color" if color else ""
        color_emphasis = f", especially the specified {color} color" if color else ""
        design_preservation = DESIGN_PRESERVATION_CLAUSE if preserve_design else ""

        if isinstance(product_type, ProductType):
            if product_type in HANGING_CLOTHING:
                return cls._clothing_prompt(
                    cls.get_product_name(product_type),
                    color_description,
                    color_emphasis,
                    design_preservation,
                )
            if product_type == ProductType.FACECAP:
                return cls._cap_prompt(color_description, color_emphasis, design_preservation)
            if product_type == ProductType.MUG:
                return cls._mug_prompt(color_description, color_emphasis, design_preservation)
            if product_type == ProductType.STICKER_PAD:
                return cls._sticker_pad_prompt(color_description, color_emphasis, design_preservation)
            if product_type == ProductType.TOTE_BAG:
                return cls._tote_bag_prompt(color_description, color_emphasis, design_preservation)

        return cls._generic_prompt(
            cls.get_product_name(product_type),
            color_description,
            color_emphasis,
            design_preservation,
        )

    @staticmethod
    def get_product_name(product_type: Union[ProductType, str]) -> str:
        """Human-readable product name, ``"product"`` for unknown categories."""
        product_type = _as_product_type(product_type)
        if isinstance(product_type, ProductType):
            return PRODUCT_NAMES[product_type]
        return GENERIC_PRODUCT_NAME

    @staticmethod
    def _clothing_prompt(
        name: str,
        color_description: str,
        color_emphasis: str,
        design_preservation: str,
    ) -> str:
        return f"""Create a high-quality, professional product photograph of a {name}{color_description} hanging from an elegant golden or wooden hanger in a luxury boutique.

Requirements:
- Hang the {name} from a premium golden or wooden hanger with a slight, natural tilt of about 15-20 degrees so the garment is shown off at its best
- Keep the focus entirely on the {name}, which should look like it is made from high-quality fabric
- Suggest an upscale boutique in the background: soft professional lighting, refined textures, a sophisticated atmosphere
- The shot should look like it belongs in a high-end fashion catalog or on a boutique website
- Use soft, flattering light that brings out the details, fabric texture and fit
- The {name} should look three-dimensional and real, like an actual physical garment
- Keep the overall look clean, minimal and luxurious.{design_preservation}
- The hanger should be visible without drawing attention away from the garment
- Use a shallow depth of field: the garment in sharp focus, the background softly blurred
- Show the fabric quality so the garment looks premium and well made
- Color accuracy matters: keep the exact colors of the product{color_emphasis}

Style: professional product photography, boutique aesthetic, luxury fashion catalog, high-end e-commerce, clean and minimal, sophisticated lighting, realistic fabric texture, premium quality."""

    @staticmethod
    def _cap_prompt(color_description: str, color_emphasis: str, design_preservation: str) -> str:
        return f"""Create a high-quality, professional product photograph of a face cap or baseball cap{color_description} displayed on an elegant cap stand or mannequin head in a luxury boutique.

Requirements:
- Place the cap on a premium cap stand, wooden display head or elegant mannequin head
- Turn the cap about 15-20 degrees so both the front design and the overall shape are visible
- Keep the focus entirely on the cap, which should look like it is made from high-quality materials
- Suggest an upscale boutique or lifestyle store in the background: soft professional lighting, refined textures, a sophisticated atmosphere
- The shot should look like it belongs in a high-end sports or lifestyle brand catalog
- Use soft, flattering light that brings out the details, material texture and structure of the cap
- The cap should look three-dimensional and real, like an actual physical item
- Keep the overall look clean, minimal and luxurious.{design_preservation}
- The stand should be visible without drawing attention away from the cap
- Use a shallow depth of field: the cap in sharp focus, the background softly blurred
- Show the material quality so the cap looks premium and well constructed
- Color accuracy matters: keep the exact colors of the cap{color_emphasis}

Style: professional product photography, boutique aesthetic, luxury sports and lifestyle catalog, high-end e-commerce, clean and minimal, sophisticated lighting, realistic material texture, premium quality."""

    @staticmethod
    def _mug_prompt(color_description: str, color_emphasis: str, design_preservation: str) -> str:
        return f"""Create a high-quality, professional product photograph of a ceramic mug{color_description} displayed on an elegant surface in a luxury boutique or modern home.

Requirements:
- Stand the mug on a beautiful surface such as a marble countertop, a wooden table or an elegant ceramic coaster
- Turn the mug about 20-30 degrees so both the front design and the shape of the mug are visible
- Keep the focus entirely on the mug, which should look like it is made from high-quality ceramic
- Suggest an upscale boutique, modern kitchen or lifestyle store in the background: soft professional lighting, refined textures, a sophisticated atmosphere
- The shot should look like it belongs in a high-end home goods catalog or on a boutique website
- Use soft, flattering light that brings out the design, the glaze and the shape of the mug
- The mug should look three-dimensional and real, like an actual physical item
- Keep the overall look clean, minimal and luxurious.{design_preservation}
- The surface should complement the mug without distracting from it; natural light, soft shadows or a few minimal props are welcome
- Use a shallow depth of field: the mug in sharp focus, the background softly blurred
- Show the ceramic quality so the mug looks premium and well crafted
- Color accuracy matters: keep the exact colors of the mug{color_emphasis}

Style: professional product photography, boutique aesthetic, luxury home goods catalog, high-end e-commerce, clean and minimal, sophisticated lighting, realistic ceramic texture, premium quality, lifestyle photography."""

    @staticmethod
    def _sticker_pad_prompt(color_description: str, color_emphasis: str, design_preservation: str) -> str:
        return f"""Create a high-quality, professional product photograph of a sticker pad or notepad{color_description} displayed on an elegant desk or table surface in a luxury boutique or modern workspace.

Requirements:
- Lay the sticker pad on a beautiful surface such as a wooden desk, a marble table or a tidy, elegant workspace
- Angle the pad about 15-25 degrees so the cover design is shown in a natural, inviting way
- Keep the focus entirely on the sticker pad, which should look like it is made from high-quality paper
- Suggest an upscale boutique, modern office or lifestyle store in the background: soft professional lighting, refined textures, a sophisticated atmosphere
- The shot should look like it belongs in a high-end stationery catalog
- Use soft, flattering light that brings out the design, paper texture and finish of the pad
- The sticker pad should look three-dimensional and real, like an actual physical item
- Keep the overall look clean, minimal and luxurious.{design_preservation}
- The desk should complement the pad without distracting from it; natural light, soft shadows or a few minimal desk props are welcome
- Use a shallow depth of field: the sticker pad in sharp focus, the background softly blurred
- Show the paper quality so the pad looks premium and well made
- Color accuracy matters: keep the exact colors of the sticker pad{color_emphasis}

Style: professional product photography, boutique aesthetic, luxury stationery catalog, high-end e-commerce, clean and minimal, sophisticated lighting, realistic paper texture, premium quality, workspace lifestyle photography."""

    @staticmethod
    def _tote_bag_prompt(color_description: str, color_emphasis: str, design_preservation: str) -> str:
        return f"""Create a high-quality, professional product photograph of a tote bag{color_description} hanging from an elegant hook or arranged on a surface in a luxury boutique.

Requirements:
- Hang the tote bag from a premium golden or wooden hook, or arrange it neatly on a beautiful surface so its shape and design are clear
- Give the bag a slight natural drape or fold that shows both the front design and the overall structure
- Keep the focus entirely on the tote bag, which should look like it is made from high-quality fabric
- Suggest an upscale boutique, modern retail space or lifestyle store in the background: soft professional lighting, refined textures, a sophisticated atmosphere
- The shot should look like it belongs in a high-end fashion or lifestyle brand catalog
- Use soft, flattering light that brings out the design, material texture and structure of the bag
- The tote bag should look three-dimensional and real, like an actual physical item
- Keep the overall look clean, minimal and luxurious.{design_preservation}
- The hook or surface should be visible without drawing attention away from the bag
- Use a shallow depth of field: the tote bag in sharp focus, the background softly blurred
- Show the material quality so the bag looks premium and well constructed
- Color accuracy matters: keep the exact colors of the bag{color_emphasis}

Style: professional product photography, boutique aesthetic, luxury fashion and lifestyle catalog, high-end e-commerce, clean and minimal, sophisticated lighting, realistic fabric texture, premium quality."""

    @staticmethod
    def _generic_prompt(
        name: str,
        color_description: str,
        color_emphasis: str,
        design_preservation: str,
    ) -> str:
        return f"""Create a high-quality, professional product photograph of a {name}{color_description} displayed in a luxury boutique.

Requirements:
- Display the {name} in an elegant, natural way that shows it off at its best
- Keep the focus entirely on the {name}, which should look like it is made from high-quality materials
- Suggest an upscale boutique in the background: soft professional lighting, refined textures, a sophisticated atmosphere
- The shot should look like it belongs in a high-end catalog or on a boutique website
- Use soft, flattering light that brings out the details and texture of the product
- The {name} should look three-dimensional and real, like an actual physical item
- Keep the overall look clean, minimal and luxurious.{design_preservation}
- Use a shallow depth of field: the product in sharp focus, the background softly blurred
- Color accuracy matters: keep the exact colors of the product{color_emphasis}

Style: professional product photography, boutique aesthetic, luxury catalog, high-end e-commerce, clean and minimal, sophisticated lighting, premium quality."""
