"""
RefineAI company pricing document.
Embedded verbatim in every analysis prompt; the model derives all prices from it.
"""

COMPANY_PRICING_DOCUMENT = """\
# REFINEAI - MASTER PRICING DOCUMENT
**Version**: 3.0
**Currency**: USD

## COMPANY

### RefineAI - Bathroom Refinishing Solutions
- **Experience**: 15+ years
- **Specialty**: High-quality bathroom refinishing
- **Service area**: National (with regional variation)
- **Standard warranty**: 5 years
- **Certifications**: EPA, OSHA compliant

## DYNAMIC PRICING STRUCTURE

### 1. BASE PRICES BY SERVICE CATEGORY

#### Bathtub Refinishing
- **Small** (up to 40 sq ft): $380-520
- **Medium** (40-60 sq ft): $480-680
- **Large** (60+ sq ft): $580-820
- **Vintage/Clawfoot**: +$150-300 premium
- **Jacuzzi/Jet tub**: +$200-400 premium

#### Shower Refinishing
- **Simple walk-in**: $420-580
- **Shower/tub combo**: $520-720
- **Glass enclosure**: $580-850
- **Full tile surround**: +$200-450
- **Multi-head system**: +$100-250

#### Full Bathroom
- **Half bath** (2 fixtures): $650-950
- **Full bath** (3-4 fixtures): $1,200-1,800
- **Master suite**: $1,600-2,400
- **Commercial grade**: +50% premium

#### Tile Refinishing
- **Per sq ft**: $8-15 base
- **Project minimum**: $280
- **Floor tiles**: +$2-4 per sq ft
- **Decorative/mosaic**: +$3-6 per sq ft

#### Sink, Vanity & Countertop Refinishing
- **Pedestal sink**: $180-280
- **Vanity top / countertop**: $220-380
- **Double vanity**: $350-550
- **Vessel sinks**: +$50-100

### 2. COMPLEXITY FACTORS (multipliers)

#### Level 1-2: Simple (1.0x - 1.1x)
- Clean surfaces, little wear
- Standard colors (white, beige, almond)
- No structural repairs
- Easy access

#### Level 3-4: Moderate (1.2x - 1.4x)
- Moderate wear, some stains
- Small chips or scratches
- Extra preparation needed
- Simple color change

#### Level 5-6: Intermediate (1.5x - 1.7x)
- Multiple visible defects
- Some repairs needed
- Extensive preparation
- Custom colors

#### Level 7-8: Complex (1.8x - 2.2x)
- Significant structural damage
- Several large repairs
- Difficult working conditions
- Special finishes

#### Level 9-10: Extreme (2.3x - 3.0x)
- Partial rebuild required
- Hazardous conditions (asbestos, etc.)
- Very difficult access
- Emergency work

### 3. MATERIAL AND PREPARATION COSTS

#### Surface Preparation
- **Basic cleaning**: $45-75
- **Peeling/scraping**: $75-150
- **Chemical stripping**: $125-250
- **Sanding/grinding**: $100-200
- **Special primer**: $50-120

#### Refinishing Materials
- **Standard polyurethane**: Base cost
- **Premium epoxy**: +$80-150
- **Commercial grade**: +$150-300
- **Antimicrobial coating**: +$60-120
- **Textured finish**: +$70-140

#### Structural Repairs
- **Chip repair** (small): $25-60 each
- **Crack repair**: $40-100 per linear ft
- **Hole repair**: $75-200 per hole
- **Caulk replacement**: $35-75
- **Hardware replacement**: $45-150

### 4. SURFACE AND MATERIAL FACTORS

#### Base Surface Type
- **Fiberglass**: Base pricing
- **Acrylic**: -5% to -10%
- **Cast iron**: +10% to +20%
- **Steel/Porcelain**: +5% to +15%
- **Natural stone**: +20% to +40%
- **Concrete**: +15% to +30%

#### Surface Age
- **New** (0-3 years): Base pricing
- **Recent** (3-8 years): +0% to +5%
- **Mature** (8-15 years): +5% to +15%
- **Old** (15-25 years): +15% to +30%
- **Vintage** (25+ years): +25% to +50%

### 5. ADDITIONAL SERVICES

#### Special Preparation
- **Mold treatment**: $85-180
- **Lead paint handling**: $150-350
- **Asbestos precautions**: $200-500
- **Ventilation setup**: $75-150

#### Color and Finish
- **Color matching**: $60-120
- **Custom colors**: $80-200
- **Metallic finishes**: +$150-350
- **Textured applications**: +$100-250
- **Logo/design work**: $200-600

#### Urgency and Timing
- **Same day service**: 2.0x multiplier
- **Rush job** (24-48h): 1.5x multiplier
- **Weekend work**: 1.3x multiplier
- **Holiday work**: 1.8x multiplier
- **Night shift**: 1.4x multiplier

### 6. GEOGRAPHIC AND LOGISTICS FACTORS

#### Location
- **Metropolitan area**: +10% to +25%
- **Standard suburb**: Base pricing
- **Rural area**: -5% to +15%
- **High-cost zone**: +20% to +40%

#### Access and Logistics
- **Ground floor**: Base pricing
- **Upper floors**: +$50-150
- **Difficult access**: +$75-200
- **Equipment transport**: +$100-300
- **Parking limitations**: +$25-75

### 7. QUALITY AND WARRANTY

- **Standard service**: 3-year warranty, single prime + finish, standard rates
- **Premium service**: 5-year warranty, multi-coat system, +25% to +40%
- **Commercial grade**: 7-10 year warranty, heavy-duty system, +50% to +80%

### 8. DISCOUNTS

#### Volume
- **2 bathroom items**: -5%
- **3+ bathroom items**: -10%
- **Whole house**: -15%
- **Commercial contract**: -10% to -20%

#### Seasonal
- **Off-season** (Nov-Feb): -5% to -10%
- **Peak season** (Mar-Jun): +5% to +10%
- **Holiday periods**: +10% to +15%

### 9. LABOR

#### Estimated Hours per Project
- **Small bathtub**: 6-10 hours
- **Large shower**: 8-14 hours
- **Full bathroom**: 16-28 hours
- **Complex restoration**: 20-40 hours

#### Hourly Rates
- **Standard technician**: $65-85/hour
- **Senior technician**: $85-105/hour
- **Specialist work**: $105-130/hour
- **Emergency rates**: $130-180/hour

## HOW TO PRICE A PROJECT

1. **ASSESS THE PHOTO:** identify the surface type, estimate the area in sq ft,
   rate the overall condition (1-10) and list the specific damage.
2. **APPLY PRICING:** start from the category base price, apply the complexity
   multiplier, add repair costs, include surface and age factors.
3. **CONSIDER EXTRAS:** location (if known), urgency, quality level,
   additional services.
4. **TOTAL:** base x complexity + repairs + extras, apply discounts, round to
   the nearest $25.

### WORKED EXAMPLE
"8-year-old fiberglass bathtub, 45 sq ft, a few chips and moderate wear, standard refinishing":

- Base: $480 (medium bathtub)
- Complexity: level 4 = 1.3x
- Chips: 3 small = $75
- Age: 8 years = +5%
- Calculation: ($480 x 1.3 + $75) x 1.05 = $734
- Final: $725 (rounded)
"""
